"""ParkWatch — wildlife sighting map and viewport engine."""

__version__ = "0.1.0"
