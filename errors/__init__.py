"""Error taxonomy shared by the pitch, scale and file layers.

Every parse failure aborts the whole parse and is raised to the caller; the
first malformed line is the one reported. Line-level errors carry the
1-based ``lineno`` of the offending line when raised while parsing a scale.
"""

from typing import Optional


class TuningError(Exception):
    """Base class for every error raised by ELLIS."""


class ParseScaleError(TuningError, ValueError):
    """A Scala text could not be turned into a scale."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno

    def __str__(self) -> str:
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}"
        return self.message

    def __reduce__(self):
        return type(self), (self.message, self.lineno)


class ParsePitchError(ParseScaleError):
    """A single pitch token is malformed."""

    def __init__(self, message: str, token: str = "", lineno: Optional[int] = None):
        super().__init__(message, lineno)
        self.token = token

    def __reduce__(self):
        return type(self), (self.message, self.token, self.lineno)


class ParseFloatError(ParsePitchError):
    """Malformed cents value."""


class ParseIntError(ParsePitchError):
    """Malformed integer (ratio term, bare integer or pitch count)."""


class MissingDescriptionError(ParseScaleError):
    def __init__(self):
        super().__init__("missing description line")

    def __reduce__(self):
        return type(self), ()


class MissingNoteCountError(ParseScaleError):
    def __init__(self):
        super().__init__("missing note count line")

    def __reduce__(self):
        return type(self), ()


class WrongPitchCountError(ParseScaleError):
    """The declared note count differs from the number of pitch lines."""

    def __init__(self, actual: int, expected: Optional[int] = None):
        if expected is None:
            message = f"wrong pitch count: found {actual}"
        else:
            message = f"wrong pitch count: declared {expected}, found {actual}"
        super().__init__(message)
        self.actual = actual
        self.expected = expected

    def __reduce__(self):
        return type(self), (self.actual, self.expected)


class ScaleFileError(TuningError):
    """Failure while reading or writing a Scala file.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message

    def __reduce__(self):
        return type(self), (self.path, self.message)


class ScaleIOError(ScaleFileError):
    """The file could not be read or written."""


class ScaleDecodeError(ScaleFileError):
    """The file content is not valid text in the requested encoding."""


class ScaleSyntaxError(ScaleFileError):
    """The file content is not a valid Scala scale."""
