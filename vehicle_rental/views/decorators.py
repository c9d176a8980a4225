"""
Decorators
-------------------------
"""
from functools import wraps
from inspect import isawaitable
from typing import Dict, Any, Union, Tuple

from aiohttp.web_request import Request
from aiohttp.web_urldispatcher import View

from vehicle_rental.models import MAX_ID
from vehicle_rental.service.errors import BadRequestError, NotFoundError


def url_id(request: Request, entity_name: str, name: str = "id") -> int:
    """
    Gets an id from the url. The routes only match digits, but ids
    larger than the database holds cannot belong to anything.

    :raises NotFoundError: If the id is out of range.
    """
    value = int(request.match_info[name])
    if value > MAX_ID:
        raise NotFoundError(f"{entity_name} not found")
    return value


def resolve_match_map(request: Request, match_map) -> Dict[str, Any]:
    """
    Converts the url variables named in the match map to the kwargs of the getter.

    :raises BadRequestError: When a variable cannot be converted.
    """
    resolved_matches = {}

    for key, value in match_map.items():
        if isinstance(value, str):
            value = (value, int)

        if not isinstance(value, tuple):
            raise TypeError(f"match_getter incorrectly configured (doesn't support {type(value)})")

        name, converter = value
        param = request.match_info.get(name)
        try:
            resolved_matches[key] = converter(param)
        except (ValueError, TypeError) as error:
            raise BadRequestError(
                f'Could not convert url parameter "{param}" to expected type {converter.__name__}.'
            ) from error

    return resolved_matches


def match_getter(getter_function, injection_parameter: str, **match_map: Union[str, Tuple[str, type]]):
    """
    Automatically fetches and includes an item, or 404's if it doesn't exist.

    .. code-block:: python

        # example usage
        @match_getter(get_vehicle, 'vehicle', vehicle_id='id')
        async def get(self, vehicle: Vehicle)
            return vehicle

    :param getter_function: The function to fetch the item from.
    :param injection_parameter: The name of the parameter to pass the object as.
    :param match_map: Associates a kwarg on the ``getter_function`` to a url variable, and optionally its type.
    :return: A decorator that wraps the response and passes in the object.
    """
    entity_name = injection_parameter.replace("_", " ").capitalize()

    def attach_instance(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            params = resolve_match_map(self.request, match_map)

            item = None
            if all(not isinstance(value, int) or abs(value) <= MAX_ID for value in params.values()):
                item = getter_function(**params)
                if isawaitable(item):
                    item = await item

            if item is None:
                identifier = ", ".join(str(value) for value in params.values())
                raise NotFoundError(f"{entity_name} not found with id {identifier}")

            return await original_function(self, **kwargs, **{injection_parameter: item})

        return new_func

    return attach_instance
