"""Core configuration for the User Sync API."""
