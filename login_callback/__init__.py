"""Sign-in callback service for WorkOS AuthKit."""

__version__ = "0.1.0"
