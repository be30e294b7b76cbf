"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class MatrixAccountDataError(ProviderError):
    """Homeserver rejected or failed an account-data request."""

    def __init__(
        self, message: str, status_code: int | None = None, errcode: str | None = None
    ):
        self.status_code = status_code
        self.errcode = errcode
        super().__init__(message)
