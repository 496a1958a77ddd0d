class ImdbError(Exception):
    """Base exception for every failure raised by the client."""

    name = "imdb api error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingApiKey(ImdbError):
    """Raised when options are absent or carry no API key."""


class MissingCriteria(ImdbError):
    """Raised when a single-title fetch has neither a name nor an id."""


class RemoteError(ImdbError):
    """Raised when OMDb answers with an ``Error`` payload."""


class UnrecognizedType(ImdbError):
    """Raised when a title's ``Type`` is none of the known kinds."""

    def __init__(self, type_value):
        super().__init__(f"type: '{type_value}' is not valid")
        self.type_value = type_value


class InvalidField(ImdbError):
    """Raised when a field cannot be coerced while building a record."""

    def __init__(self, field: str, value):
        super().__init__(f"invalid {field}: {value!r}")
        self.field = field
        self.value = value


class TitleNotSeries(ImdbError):
    """Raised when episodes are requested for a title that is not a series."""
