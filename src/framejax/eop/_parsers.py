"""Parsers for IERS Earth Orientation Parameter data files.

Supports the IERS standard format (``finals.all.iau2000.txt``, the
Bulletin A "finals2000A" layout).  Column ranges and unit conversions
follow the IERS ``readme.finals2000A`` description; only the Bulletin A
columns are read.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import NamedTuple

from framejax.constants import AS2RAD, MAS2RAD

# Column ranges for IERS standard format (0-indexed Python slices)
_MJD_RANGE = slice(6, 15)
_PM_X_RANGE = slice(17, 27)
_PM_Y_RANGE = slice(36, 46)
_UT1_UTC_RANGE = slice(58, 68)
_LOD_RANGE = slice(78, 86)
_DX_RANGE = slice(96, 106)
_DY_RANGE = slice(115, 125)
_STANDARD_LINE_LENGTH = 187


class EOPRecord(NamedTuple):
    """One parsed line of an IERS standard file (SI units, radians).

    ``lod``, ``dX`` and ``dY`` are NaN on prediction lines that omit them.
    """

    mjd: float
    pm_x: float
    pm_y: float
    ut1_utc: float
    lod: float
    dX: float
    dY: float


def _field(line: str, columns: slice, scale: float) -> float:
    """Read a fixed-width numeric field, NaN if blank or malformed."""
    try:
        return float(line[columns]) * scale
    except ValueError:
        return math.nan


def parse_standard_line(line: str) -> EOPRecord | None:
    """Parse a single line from an IERS standard format EOP file.

    Lines shorter than 187 characters are padded with spaces (prediction
    lines may have trailing whitespace trimmed). Lines longer than 187
    characters or lines where a required field (MJD, PM_X, PM_Y, UT1-UTC)
    is missing are skipped.

    Args:
        line: A single line from the IERS standard format file.

    Returns:
        The parsed :class:`EOPRecord`, or None if the line cannot be parsed.
    """
    if len(line) > _STANDARD_LINE_LENGTH:
        return None
    line = line.ljust(_STANDARD_LINE_LENGTH)

    record = EOPRecord(
        mjd=_field(line, _MJD_RANGE, 1.0),
        pm_x=_field(line, _PM_X_RANGE, AS2RAD),
        pm_y=_field(line, _PM_Y_RANGE, AS2RAD),
        ut1_utc=_field(line, _UT1_UTC_RANGE, 1.0),
        lod=_field(line, _LOD_RANGE, 1.0e-3),  # ms -> s
        dX=_field(line, _DX_RANGE, MAS2RAD),
        dY=_field(line, _DY_RANGE, MAS2RAD),
    )
    if any(math.isnan(v) for v in record[:4]):
        return None
    return record


def parse_standard_file(filepath: str | Path) -> list[EOPRecord]:
    """Parse an entire IERS standard format EOP file.

    Lines that cannot be parsed (e.g. empty prediction lines at the end of
    the file) are skipped.

    Args:
        filepath: Path to the IERS standard format file.

    Returns:
        Parsed records in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no valid lines were parsed.
    """
    with open(filepath) as f:
        records = [r for r in (parse_standard_line(line.rstrip("\n")) for line in f) if r is not None]

    if not records:
        raise ValueError(f"No valid EOP data found in {filepath}")
    return records
