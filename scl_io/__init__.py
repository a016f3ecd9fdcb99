"""Scala (.scl) file import and export.

This module is the file layer around the scale codec: it reads bytes from
disk, decodes them and hands the text to scale.parse_scale, and writes
formatted scales back.

Scala Format Support:
- Strict decoding (utf-8 by default); invalid byte sequences are reported
- Export of the normalised text produced by scale.format_scale
- Directory scanning for Scala archives ('scl' by default)

Error Handling:
- OSError, UnicodeDecodeError and ParseScaleError are wrapped into the
  ScaleFileError family with the file path attached
- Directory loading either skips bad files with a logged warning or stops
  at the first one (strict mode)
"""
import logging
import os
from typing import List, Tuple

import consts
from errors import ParseScaleError, ScaleDecodeError, ScaleIOError, ScaleSyntaxError
from scale import Scale, format_scale, parse_scale

logger = logging.getLogger(__name__)


def read_scale(path: str, encoding: str = "utf-8") -> Scale:
    """Read and parse a .scl file.

    Raises ScaleIOError, ScaleDecodeError or ScaleSyntaxError, chained to the
    underlying exception.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ScaleIOError(path, str(e)) from e

    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        raise ScaleDecodeError(path, str(e)) from e

    try:
        scale = parse_scale(text)
    except ParseScaleError as e:
        raise ScaleSyntaxError(path, str(e)) from e

    logger.debug("Parsed %s: %r, %d pitches", path, scale.name, len(scale.pitches))
    return scale


def write_scale(path: str, scale: Scale, encoding: str = "utf-8") -> str:
    """Write a scale as a .scl file and return the path."""
    try:
        with open(path, "w", encoding=encoding, newline="\n") as f:
            f.write(format_scale(scale))
    except OSError as e:
        raise ScaleIOError(path, str(e)) from e
    logger.debug("Wrote %s", path)
    return path


def iter_scale_paths(dir_path: str = consts.DEFAULT_SCL_DIR) -> List[str]:
    """Return the .scl files of a directory, sorted by file name."""
    try:
        names = os.listdir(dir_path)
    except OSError as e:
        raise ScaleIOError(dir_path, str(e)) from e
    return [
        os.path.join(dir_path, fn)
        for fn in sorted(names)
        if fn.lower().endswith(consts.SCL_EXTENSION) and os.path.isfile(os.path.join(dir_path, fn))
    ]


def load_scales_from_dir(dir_path: str = consts.DEFAULT_SCL_DIR, strict: bool = False) -> List[Tuple[str, Scale]]:
    """Load every readable .scl file of a directory.

    Returns (path, scale) pairs in file name order. Unless strict, files that
    fail to load are logged and skipped.
    """
    out: List[Tuple[str, Scale]] = []
    for fp in iter_scale_paths(dir_path):
        try:
            out.append((fp, read_scale(fp)))
        except (ScaleIOError, ScaleDecodeError, ScaleSyntaxError) as e:
            if strict:
                raise
            logger.warning("Skipping %s", e)
    return out
