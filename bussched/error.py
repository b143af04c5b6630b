"""
Error Types.
"""


class BusSchedError(Exception):
    """
    Root Error.
    """


class NetworkError(BusSchedError):
    """
    A request could not be delivered (connection refused, timeout, DNS, ...).
    """


class ApiError(BusSchedError):
    """
    The API answered with a non-success status or a malformed payload.
    """

    status_code: int | None
    url: str | None

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ValidationError(BusSchedError):
    """
    Missing or invalid trip/form fields.
    """
