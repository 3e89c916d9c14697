"""Error hierarchy for datamanager.

Every failure produced by the package is an instance of
:class:`DataManagerError`, which carries a stable ``code`` string so that
callers can branch on the failure kind without ``isinstance`` chains.

These exceptions are not raised across component boundaries. They travel
as the payload of :class:`~datamanager.outcome.Failure` and are only raised
when a caller explicitly unwraps an outcome with
:meth:`~datamanager.outcome.Outcome.get`.

Subclass hierarchy::

    DataManagerError    (error)
    +-- InvalidURLError      (invalid_url)
    +-- BadResponseError     (bad_response)
    +-- InvalidJSONError     (invalid_json)
    +-- InvalidFormatError   (invalid_format)
    +-- NoDataError          (no_data)
    +-- NoFilePathError      (no_file_path)
    +-- FileNotFoundError_   (file_not_found)

Transport failures are not wrapped: the :mod:`httpx` exception is carried
verbatim.
"""


class DataManagerError(Exception):
    """Base exception for all datamanager errors.

    Args:
        message: Human-readable error description. Defaults to the class
            docstring's first line.
        code: Optional override for the class-level code.
    """

    code: str = "error"

    def __init__(self, message: str | None = None, code: str | None = None):
        if message is None:
            message = (self.__doc__ or self.code).strip().splitlines()[0]
        super().__init__(message)
        if code is not None:
            self.code = code


class InvalidURLError(DataManagerError):
    """The request URL could not be composed from the domain and path."""

    code = "invalid_url"


class BadResponseError(DataManagerError):
    """The server returned no body."""

    code = "bad_response"


class InvalidJSONError(DataManagerError):
    """The response body is not valid JSON."""

    code = "invalid_json"


class InvalidFormatError(DataManagerError):
    """The response body is JSON but neither an object nor an array."""

    code = "invalid_format"


class NoDataError(DataManagerError):
    """A fetch succeeded but produced no data."""

    code = "no_data"


class NoFilePathError(DataManagerError):
    """The storage location has no resolvable directory."""

    code = "no_file_path"


class FileNotFoundError_(DataManagerError):
    """No cached file exists for the key, or it could not be read.

    Named with a trailing underscore to avoid shadowing the built-in
    ``FileNotFoundError``.
    """

    code = "file_not_found"
