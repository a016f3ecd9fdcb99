"""Constants and metadata for the ELLIS Scala codec.

This module centralizes the constants shared by the pitch and scale codecs,
the file layer and the command line entry point.

Program Metadata:
- Version information and authorship details

Mathematical Constants:
- Cents per octave and per 12-TET semitone
- Unsigned 128-bit bound for ratio terms
- Default frequency references (A4 = 440 Hz, base key C4)

Scala Format:
- Comment marker, generated-file header and cents precision
- File extension used when scanning directories
"""

import re

# Metadata
__program_name__ = "ELLIS"  # In honor of Alexander J. Ellis, who introduced the cent
__version__ = "1.0.0"
__author__ = "ELLIS contributors"
__date__ = "2026-10-18"
__license__ = "MIT"

# Constants
CENTS_PER_OCTAVE = 1200.0
CENTS_PER_SEMITONE = 100.0
SEMITONES_PER_OCTAVE = 12
U128_MAX = 2 ** 128 - 1
DEFAULT_DIAPASON = 440.0
DEFAULT_BASEKEY = 60
MIDI_A4 = 69

# Scala format
COMMENT_CHAR = "!"
GENERATED_HEADER = "! Generated scale:"
CENTS_UNIT = "cents"
CENTS_DECIMALS = 5
SCL_EXTENSION = ".scl"
DEFAULT_SCL_DIR = "scl"

# Token grammar: unsigned decimal integers and decimal/special floats
UINT_PATTERN = re.compile(r"\+?[0-9]+")
FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

# Log file used by the command line entry point
DEFAULT_LOG_FILE = "ellis_warnings.log"

