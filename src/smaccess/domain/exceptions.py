"""Domain exceptions."""


class SecretsAccessError(Exception):
    """Base exception for smaccess."""

    pass


class NotFound(SecretsAccessError):
    """Resource is missing or the caller may not see it.

    Both cases raise the same error so callers cannot probe for existence.
    """

    pass


class BadRequest(SecretsAccessError):
    """Request violates an input or business rule."""

    pass
