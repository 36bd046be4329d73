"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class ProfileNotFoundError(Exception):
    """Raised when no profile is stored for a user."""
    pass

class InvalidRequestError(Exception):
    """Raised when a request body cannot be understood."""
    pass
