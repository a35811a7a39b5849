"""User Sync API: pulls remote user records behind a bearer-token login and stores them locally."""

__version__ = "0.1.0"
