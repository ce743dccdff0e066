class MgnregaError(Exception):
    """Base class for errors raised by the comparison backend."""


class SourceUnavailable(MgnregaError):
    """The upstream data.gov.in call failed or returned a malformed payload."""


class NotFound(MgnregaError):
    """No records matched a requested district."""

    def __init__(self, message="No data found for this district."):
        super().__init__(message)
        self.message = message
