"""
Signals
-------

Defines the signals that the aiohttp server uses to
set up and tear down the database.

Each signal must accept the ``app`` argument.
"""
from aiohttp.abc import Application
from tortoise import Tortoise, connections

from vehicle_rental import logger


async def initialize_database(app: Application):
    """Initializes and generates the schema for our database."""
    logger.info("Connecting to the database")
    await Tortoise.init(
        db_url=app['database_uri'],
        modules={'models': ['vehicle_rental.models']}
    )
    await Tortoise.generate_schemas(safe=True)


async def close_database_connections(app: Application):
    """Closes the open database connections."""
    await connections.close_all()


def register_signals(app, init_database=True):
    """
    Registers all the signals at the appropriate hooks.

    :param init_database: Whether the app owns the database. Tests
        set up the database themselves, so they pass False.
    """
    if init_database:
        app.on_startup.append(initialize_database)
        app.on_cleanup.append(close_database_connections)
