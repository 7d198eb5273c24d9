"""CampusConnect: campus events catalog, registration and notification service."""

__version__ = "1.0.0"
