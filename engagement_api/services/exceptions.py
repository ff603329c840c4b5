# /engagement_api/services/exceptions.py

"""
Domain errors raised by the service layer. Routers translate them into
HTTP status codes; anything else coming out of a service is a 500.
"""


class ResourceNotFoundError(LookupError):
    """A record that an operation depends on does not exist."""


class ResourceConflictError(ValueError):
    """The write would break a uniqueness rule (duplicate email, duplicate day, ...)."""
