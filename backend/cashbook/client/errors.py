class ClientError(Exception):
    pass


class NetworkFailure(ClientError):
    """The store could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(NetworkFailure):
    pass


class ValidationFailure(ClientError):
    pass


class NothingToExport(ValidationFailure):
    pass
