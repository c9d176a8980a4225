import os

from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), "readme.md"), "r") as fh:
    long_description = fh.read()

setup(
    name='vehicle-rental-server',
    version='1.0.0',
    license='MIT',
    description='An administrative REST api for renting out cars, trucks and trailers.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires='>=3.9',
    install_requires=[
        'aiohttp>=3.8',
        'aiohttp-cors',
        'aiohttp-apispec',
        'marshmallow>=3.13,<4',
        'tortoise-orm>=0.20',
        'sentry-sdk',
        'uvloop',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-aiohttp',
            'pytest-asyncio',
            'faker',
        ],
    },
    entry_points={
        'console_scripts': ['vehicle-rental=vehicle_rental.cli:run'],
    },
)
