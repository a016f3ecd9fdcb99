"""Step tables for Scala scales.

One row per scale degree, starting from the implicit 1/1:

    Step  Pitch      Cents         Offset     Hz
    0     1/1        0.00000       0.00000    261.625565
    1     9/8        203.91000     2.03910    294.328761

Tables are printed to the terminal or exported to Excel (.xlsx) through
openpyxl, one worksheet per scale with a bold shaded header row and the base
frequency anchored next to the table.
"""

import math
import re
from typing import List, Optional, Sequence, Set, Tuple

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

import utils
from pitch import Pitch, Ratio
from scale import Scale

STEP_HEADERS = ["Step", "Pitch", "Cents", "Offset", "Hz"]

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")
_MAX_SHEET_TITLE = 31

StepRow = Tuple[int, str, float, float, float]


def build_step_rows(scale: Scale, basenote_hz: float) -> List[StepRow]:
    """Compute (step, pitch text, cents, note offset, Hz) for every degree."""
    degrees: List[Pitch] = [Ratio(1, 1)]
    degrees.extend(scale.pitches)
    return [
        (idx, str(p), p.to_cents(), p.to_note_offset(), p.to_frequency(basenote_hz))
        for idx, p in enumerate(degrees)
    ]


def format_step_table(scale: Scale, basenote_hz: float) -> List[str]:
    """Format the step table of a scale as aligned text lines."""
    rows = [
        [str(step), text, f"{cents:.5f}", f"{offset:.5f}", f"{hz:.6f}"]
        for step, text, cents, offset, hz in build_step_rows(scale, basenote_hz)
    ]
    return utils.format_aligned_table(STEP_HEADERS, rows)


def print_step_table(scale: Scale, basenote_hz: float) -> None:
    """Prints the step table of a scale."""
    for line in format_step_table(scale, basenote_hz):
        print(line)


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _excel_text(value: str) -> str:
    """Drop the control characters that openpyxl refuses to store."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _set_text(ws, row: int, column: int, value: str) -> None:
    """Write a literal string cell; text starting with '=' stays text."""
    cell = ws.cell(row=row, column=column, value=_excel_text(value))
    cell.data_type = "s"


def _sheet_title(name: str, index: int, used: Set[str]) -> str:
    """Excel-safe, unique worksheet title for a scale description."""
    base = _INVALID_SHEET_CHARS.sub("_", _excel_text(name)).strip().strip("'") or f"Scale {index}"
    title = base[:_MAX_SHEET_TITLE]
    suffix = 2
    while title.lower() in used:
        tag = f" ({suffix})"
        title = base[:_MAX_SHEET_TITLE - len(tag)] + tag
        suffix += 1
    used.add(title.lower())
    return title


def export_scale_excel(output_base: str, scales: Sequence[Scale], basenote_hz: float) -> str:
    """Export the step tables of the scales to {output_base}_scales.xlsx.

    Descriptions are written as plain text with control characters removed.
    Raises OSError when the workbook cannot be saved.
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    used: Set[str] = set()

    for idx, scale in enumerate(scales, start=1):
        ws = wb.create_sheet(title=_sheet_title(scale.name, idx, used))
        utils.setup_excel_worksheet_formatting(ws, STEP_HEADERS)

        # Base Hz and description anchors
        ws.cell(row=1, column=7, value="Base_Hz")
        ws.cell(row=2, column=7, value=float(basenote_hz))
        ws.cell(row=1, column=8, value="Description")
        _set_text(ws, 2, 8, scale.name)

        for step, text, cents, offset, hz in build_step_rows(scale, basenote_hz):
            row_idx = step + 2
            ws.cell(row=row_idx, column=1, value=step)
            _set_text(ws, row_idx, 2, text)
            ws.cell(row=row_idx, column=3, value=_finite_or_none(cents))
            ws.cell(row=row_idx, column=4, value=_finite_or_none(offset))
            ws.cell(row=row_idx, column=5, value=_finite_or_none(hz))

    if not wb.worksheets:
        wb.create_sheet(title="Scales")

    xlsx_path = f"{output_base}_scales.xlsx"
    wb.save(xlsx_path)
    utils.log_export_success(xlsx_path)
    return xlsx_path
