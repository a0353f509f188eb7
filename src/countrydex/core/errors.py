"""Exceptions raised by the Countrydex core and rendered by the API layer.

Each exception carries the HTTP status the API should answer with and a
message that is shown to the user as-is.
"""


class CountrydexError(Exception):
    """Base class for user-facing Countrydex failures."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingFieldsError(CountrydexError):
    """A required form field was absent or blank."""

    status_code = 400


class UnsupportedFileTypeError(CountrydexError):
    """The uploaded file is not an allowed image type."""

    status_code = 400


class PayloadTooLargeError(CountrydexError):
    """The uploaded file exceeds the configured size limit."""

    status_code = 413


class EntryNotFoundError(CountrydexError):
    """No collection entry exists for the requested id."""

    status_code = 404


class StoreError(CountrydexError):
    """The record store could not complete an operation."""

    status_code = 500
