"""ParkRoute - walking directions between NYC dog runs and skate parks."""

__version__ = "1.0.0"
