# anjia_properties/errors/exceptions.py

"""Errors raised by data source adapters and filter parsing."""


class SourceError(Exception):
    """Base class for failures talking to a data source."""

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(message)
        self.source = source


class NetworkError(SourceError):
    """Connection failure, timeout or transient HTTP status. Retryable."""


class MalformedResponseError(SourceError):
    """The source answered, but the payload cannot be used."""


class NotFoundError(SourceError):
    """The source explicitly reports that the id does not exist."""


class ValidationError(ValueError):
    """A filter value could not be parsed."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Invalid value for {field!r}: {value!r}")
        self.field = field
        self.value = value
