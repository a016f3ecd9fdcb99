"""Core utilities and mathematical functions for the ELLIS codec.

This module provides the helpers shared by the pitch and scale codecs, the
file layer, the step tables and the command line entry point.

Mathematical Operations:
- Ratio-to-cents and cents-to-note-offset conversions
- MIDI note to frequency conversion with custom diapason
- Strict parsing of unsigned integers and decimal floats

Logging:
- File based logging setup with Python warnings redirected to the log

Localization:
- Minimal Italian/English message selection for the command line

Table Output:
- Aligned text tables and openpyxl worksheet formatting
"""

import logging
import math
import warnings
from typing import List, Optional

import consts

# --- Logging system ---

def setup_logging(log_file: Optional[str] = consts.DEFAULT_LOG_FILE, verbose: bool = False) -> None:
    """Setup logging to a file and redirect Python warnings to it."""
    handlers: List[logging.Handler] = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    if verbose:
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )

    # Capture warnings and redirect to logger
    def warning_handler(message, category, filename, lineno, file=None, line=None):
        logger = logging.getLogger('warnings')
        logger.warning(f"{category.__name__}: {message} ({filename}:{lineno})")

    warnings.showwarning = warning_handler


# --- Localization ---

_LANG = "it"


def set_language(lang: str) -> None:
    """Select the interface language ('it' or 'en')."""
    global _LANG
    _LANG = "en" if str(lang).lower() == "en" else "it"


def L(it_msg: str, en_msg: str) -> str:
    """Restituisce il messaggio nella lingua selezionata / Return message in selected language."""
    return it_msg if _LANG == "it" else en_msg


# --- Number parsing ---

def parse_uint(text: str, limit: int = consts.U128_MAX) -> int:
    """Parse an unsigned decimal integer in [0, limit].

    Only ASCII digits with an optional leading '+' are accepted.
    Raises ValueError otherwise.
    """
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not consts.UINT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    value = int(text)
    if value > limit:
        raise ValueError(f"number too large to fit in target type: {text!r}")
    return value


def parse_float(text: str) -> float:
    """Parse a decimal float (with optional exponent) or inf/infinity/nan.

    Raises ValueError on anything else, including underscores and whitespace.
    """
    if not text:
        raise ValueError("cannot parse float from empty string")
    if not consts.FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


# --- Conversions ---

def ratio_to_cents(numerator: int, denominator: int) -> float:
    """Convert an integer frequency ratio to cents. A zero numerator gives -inf."""
    if numerator == 0:
        return -math.inf
    return math.log2(numerator / denominator) * consts.CENTS_PER_OCTAVE


def ratio_to_note_offset(numerator: int, denominator: int) -> float:
    """Convert an integer frequency ratio to fractional 12-TET semitones."""
    if numerator == 0:
        return -math.inf
    return math.log2(numerator / denominator) * consts.SEMITONES_PER_OCTAVE


def cents_to_note_offset(cents: float) -> float:
    """Convert cents to fractional 12-TET semitones."""
    return cents / consts.CENTS_PER_SEMITONE


def apply_cents(freq_hz: float, cents: float) -> float:
    """Applica offset in cents a una frequenza / Apply cents offset to a frequency."""
    return float(freq_hz) * (2.0 ** (float(cents) / consts.CENTS_PER_OCTAVE))


def convert_midi_to_hz(midi_value: int, diapason_hz: float = consts.DEFAULT_DIAPASON) -> float:
    """Converte valore MIDI in frequenza Hz."""
    return diapason_hz * (2 ** ((float(midi_value) - consts.MIDI_A4) / consts.SEMITONES_PER_OCTAVE))


# --- Table output ---

def format_aligned_table(headers: List[str], rows: List[List[str]]) -> List[str]:
    """Format a table with aligned columns.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of strings

    Returns:
        List of formatted lines ready for printing
    """
    if not headers:
        return []

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for col_idx, cell in enumerate(row):
            if col_idx < len(widths):
                if len(cell) > widths[col_idx]:
                    widths[col_idx] = len(cell)

    def format_row(row_data):
        return "  ".join(str(row_data[i]).ljust(widths[i]) for i in range(min(len(row_data), len(widths)))).rstrip()

    lines = [format_row(headers)]
    for row in rows:
        lines.append(format_row(row))

    return lines


def log_export_success(file_path: str) -> None:
    """Log successful file export."""
    print(L(f"Esportato: {file_path}", f"Exported: {file_path}"))


def log_export_error(file_path: str, error: Exception) -> None:
    """Log file export error."""
    print(L(f"Errore di scrittura {file_path}: {error}", f"Write error {file_path}: {error}"))


def setup_excel_worksheet_formatting(ws, headers: List[str]) -> None:
    """Setup Excel worksheet with standard formatting."""
    from openpyxl.styles import Font, PatternFill

    ws.append(headers)

    header_font = Font(bold=True)
    header_fill = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
    for cell in ws[ws.max_row]:
        cell.font = header_font
        cell.fill = header_fill
