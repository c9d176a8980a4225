"""
The primary entry point to the application.
"""
from vehicle_rental.cli import run

if __name__ == '__main__':
    run()
