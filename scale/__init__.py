"""Scala scale model, parser and formatter.

The Scala (.scl) format, as read here:

    ! comment lines and blank lines may appear anywhere
    <description line>
    <pitch count>
    <pitch line>            repeated <pitch count> times

Everything from the first '!' of a line onward is a comment. The description
is kept verbatim; whitespace is removed from the count and pitch lines before
they are interpreted (see pitch.parse_pitch for the pitch grammar).
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import consts
import utils
from errors import (
    MissingDescriptionError,
    MissingNoteCountError,
    ParseIntError,
    ParsePitchError,
    WrongPitchCountError,
)
from pitch import Pitch, format_pitch, parse_pitch, to_pitch


@dataclass(frozen=True)
class Scale:
    """A named, ordered sequence of pitches (the 1/1 is implicit).

    The name becomes the description line of the Scala text, so it must be
    non-empty and may contain neither '!' nor a line break; other names could
    not be read back. Raises ValueError otherwise.
    """

    name: str
    pitches: Tuple[Pitch, ...] = ()

    def __post_init__(self):
        if not self.name or consts.COMMENT_CHAR in self.name or "\n" in self.name:
            raise ValueError(f"invalid scale description: {self.name!r}")
        object.__setattr__(self, "pitches", tuple(self.pitches))

    @classmethod
    def from_values(cls, name: str, values: Iterable) -> "Scale":
        """Build a scale from pitches or literals accepted by pitch.to_pitch.

        >>> str(Scale.from_values("fifths", ["9/8", 3.0, 701.955, 2]).pitches[3])
        '2/1'
        """
        return cls(name, tuple(to_pitch(v) for v in values))

    @property
    def period(self) -> Optional[Pitch]:
        return self.pitches[-1] if self.pitches else None

    def cents(self) -> List[float]:
        return [p.to_cents() for p in self.pitches]

    def note_offsets(self) -> List[float]:
        return [p.to_note_offset() for p in self.pitches]

    def __str__(self) -> str:
        return format_scale(self)


def _data_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (lineno, line) for every line left non-empty once its comment is cut."""
    for lineno, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        line = line.split(consts.COMMENT_CHAR, 1)[0]
        if line:
            yield lineno, line


# str.isspace() accepts the ASCII information separators; they are not white space
_INFO_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def _strip_whitespace(line: str) -> str:
    return "".join(c for c in line if not c.isspace() or c in _INFO_SEPARATORS)


def parse_scale(text: str) -> Scale:
    """Parse the text of a Scala file.

    Raises:
        ParseFloatError, ParseIntError: a malformed count or pitch line.
        MissingDescriptionError: no description line.
        MissingNoteCountError: no pitch count line.
        WrongPitchCountError: the number of pitch lines differs from the count.
    """
    name: Optional[str] = None
    pitch_count: Optional[int] = None
    pitches: List[Pitch] = []

    for lineno, line in _data_lines(text):
        if name is None:
            name = line
            continue

        token = _strip_whitespace(line)
        if pitch_count is None:
            try:
                pitch_count = utils.parse_uint(token)
            except ValueError as e:
                raise ParseIntError(str(e), token=token, lineno=lineno) from e
        else:
            try:
                pitches.append(parse_pitch(token))
            except ParsePitchError as e:
                e.lineno = lineno
                raise

    if name is None:
        raise MissingDescriptionError()
    if pitch_count is None:
        raise MissingNoteCountError()
    if len(pitches) != pitch_count:
        raise WrongPitchCountError(len(pitches), pitch_count)

    return Scale(name, pitches)


def format_scale(scale: Scale) -> str:
    """Format a scale as Scala text; every line ends with a newline."""
    lines = [
        consts.GENERATED_HEADER,
        scale.name,
        str(len(scale.pitches)),
        consts.COMMENT_CHAR,
    ]
    lines.extend(format_pitch(p) for p in scale.pitches)
    return "\n".join(lines) + "\n"


def build_scale(name: str, pitches: Sequence[Pitch]) -> Scale:
    """Build a scale from a name and pre-built pitches."""
    return Scale(name, tuple(pitches))
