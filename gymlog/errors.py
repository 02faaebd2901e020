class ValidationError(ValueError):
    """User-correctable input problem; raised before anything is written."""


class NotFoundError(LookupError):
    """A referenced row does not exist."""
