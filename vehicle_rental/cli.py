"""
The entry point for the CLI tool
"""
import uvloop
from aiohttp import web

from vehicle_rental import logger
from vehicle_rental.app import build_app
from vehicle_rental.version import __version__, name


def run():
    """Builds and runs the app on uvloop."""
    logger.info(f'Starting {name} %s!', __version__)
    uvloop.install()
    web.run_app(build_app())


if __name__ == '__main__':
    run()
