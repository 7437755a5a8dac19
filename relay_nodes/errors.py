class ProxyError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ProxyError):
    """Raised before any network call when the request itself is unusable."""

    status_code = 400


class MissingField(ValidationError):
    ...


class UnsupportedAction(ProxyError):
    status_code = 400


class UpstreamError(ProxyError):
    """Provider answered with a non-2xx status; carries that status through."""


class TransportError(ProxyError):
    status_code = 500
