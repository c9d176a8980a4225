"""
App
-----
"""

import sentry_sdk
from aiohttp import web
from aiohttp_apispec import setup_aiohttp_apispec
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from vehicle_rental import server_mode, logger
from vehicle_rental.config import (
    api_root, docs_root, database_url, admin_api_key, user_api_key, api_key_header, sentry_dsn
)
from vehicle_rental.middleware import error_middleware, api_key_middleware
from vehicle_rental.permissions import default_policy
from vehicle_rental.service.manager.rental_manager import RentalManager
from vehicle_rental.service.verify_api_key import ApiKeyVerifier
from vehicle_rental.signals import register_signals
from vehicle_rental.version import __version__, name
from vehicle_rental.views import register_views


def build_app(db_uri=None, *, admin_key=None, user_key=None, init_database=True):
    """
    Sets up the app.

    :param db_uri: The tortoise database url, defaulting to the configured one.
    :param admin_key: The api key for the admin role, defaulting to the configured one.
    :param user_key: The api key for the user role, defaulting to the configured one.
    :param init_database: Whether to connect to the database when the app starts.
    """
    app = web.Application(middlewares=[error_middleware, api_key_middleware])

    app['rental_manager'] = RentalManager()
    app['database_uri'] = db_uri if db_uri is not None else database_url
    app['api_key_verifier'] = ApiKeyVerifier(
        admin_key if admin_key is not None else admin_api_key,
        user_key if user_key is not None else user_api_key,
    )
    app['access_policy'] = default_policy(api_root)

    register_signals(app, init_database)

    # register views
    register_views(app, api_root)

    setup_aiohttp_apispec(
        app=app, title=name, version=__version__,
        url=f"{docs_root}/swagger.json",
        swagger_path=docs_root,
        static_path=f"{docs_root}/static",
        securityDefinitions={
            "ApiKey": {
                "type": "apiKey",
                "in": "header",
                "name": api_key_header,
                "description": "The pre-shared key for the ADMIN or USER role",
            }
        },
        security=[{"ApiKey": []}],
    )

    # set up sentry exception tracking
    if server_mode != "development" and sentry_dsn:
        logger.info("Starting Sentry Logging")
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=server_mode,
            release=f"{name}@{__version__}",
            integrations=[AioHttpIntegration()],
        )

    return app
