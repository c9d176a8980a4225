"""
Middleware
----------
"""
from http import HTTPStatus

from aiohttp import web, hdrs
from aiohttp.abc import Request
from aiohttp.web_middlewares import middleware

from vehicle_rental import logger
from vehicle_rental.config import docs_root
from vehicle_rental.serializer.problem import problem_response
from vehicle_rental.service.errors import ServiceError, ValidationFailedError
from vehicle_rental.service.verify_api_key import verify_api_key


@middleware
async def error_middleware(request: Request, handler):
    """
    Renders the errors raised while handling a request as a problem.

    Service errors carry their own status, aiohttp's http errors
    (such as an unknown route) keep theirs, and anything else is a 500.
    """
    try:
        return await handler(request)
    except ValidationFailedError as error:
        return problem_response(error.status, error.detail, title=error.title, errors=error.errors)
    except ServiceError as error:
        return problem_response(error.status, error.detail, title=error.title)
    except web.HTTPException as error:
        if error.status < 400:
            raise
        return problem_response(HTTPStatus(error.status), error.reason)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return problem_response(HTTPStatus.INTERNAL_SERVER_ERROR, "An unexpected error occurred")


def _is_docs(request: Request) -> bool:
    return request.path == docs_root or request.path.startswith(docs_root + "/")


def _is_preflight(request: Request) -> bool:
    return request.method == hdrs.METH_OPTIONS and hdrs.ACCESS_CONTROL_REQUEST_METHOD in request.headers


@middleware
async def api_key_middleware(request: Request, handler):
    """
    Ensures that every request carries a valid api key, and is
    allowed by the access policy, before it reaches the route.
    The granted role is stored on the request as the "role".

    The documentation and CORS preflight requests are exempt.
    """
    if _is_docs(request) or _is_preflight(request):
        return await handler(request)

    request["role"] = verify_api_key(request)
    await request.app["access_policy"].authorize(request)

    return await handler(request)
