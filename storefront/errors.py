"""Error taxonomy shared by the services, the API and the content client."""


class StorefrontError(Exception):
    """Base class for every error raised by this package."""


class TransportError(StorefrontError):
    """Network failure or a 5xx/unexpected response from the content API."""


class NotFoundError(StorefrontError):
    """A segment, product or quote does not exist."""


class ValidationError(StorefrontError):
    """Input rejected at a form boundary.

    ``errors`` maps a field name to a user-facing message so callers can show
    each problem next to the field that caused it.
    """

    def __init__(self, errors, message=None):
        if isinstance(errors, str):
            errors = {"__all__": errors}
        self.errors = dict(errors)
        super().__init__(message or "; ".join(self.errors.values()))
