"""
Loader for the TERYT ULIC (streets) and SIMC (localities) CSV exports.

The exports are not valid CSV: some names carry unescaped quote characters,
which derails any quote-aware reader. Every line is therefore split on ';'
as-is, and quotes are only stripped from the ends of each field.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from .models import CityRecord, StreetRecord

logger = logging.getLogger(__name__)

FIELD_COUNT = 10
DELIMITER = ";"

_INTEGER = re.compile(r"[+-]?[0-9]+")


class DatasetKind(str, Enum):
    STREET = "street"
    CITY = "city"


@dataclass
class LoadResult:
    """Records parsed from one file, plus how many data lines were rejected."""

    kind: DatasetKind
    records: list = field(default_factory=list)
    skipped: int = 0
    lines: int = 0


def split_fields(line: str) -> List[str]:
    """Splits a raw line on ';' and cleans each field of whitespace and wrapping quotes."""
    return [raw.strip().strip('"') for raw in line.split(DELIMITER)]


def parse_int(value: str) -> int:
    """
    Parses a registry code. Anything that is not a plain integer becomes 0,
    so a broken code never costs us an otherwise usable record.
    """
    if not _INTEGER.fullmatch(value):
        return 0
    return int(value)


def parse_street(fields: List[str]) -> Optional[StreetRecord]:
    """Builds a StreetRecord from ten cleaned ULIC fields, or None without NAZWA_1."""
    if not fields[7]:
        return None
    return StreetRecord(
        woj=parse_int(fields[0]),
        pow=parse_int(fields[1]),
        gmi=parse_int(fields[2]),
        gmi_kind=parse_int(fields[3]),
        locality_id=parse_int(fields[4]),
        street_id=parse_int(fields[5]),
        street_type=fields[6],
        name=fields[7],
        secondary_name=fields[8],
    )


def parse_city(fields: List[str]) -> Optional[CityRecord]:
    """Builds a CityRecord from ten cleaned SIMC fields, or None without NAZWA."""
    if not fields[6]:
        return None
    return CityRecord(
        woj=parse_int(fields[0]),
        pow=parse_int(fields[1]),
        gmi=parse_int(fields[2]),
        gmi_kind=parse_int(fields[3]),
        locality_type=parse_int(fields[4]),
        locality_part=parse_int(fields[5]),
        name=fields[6],
        sym=parse_int(fields[7]),
        sym_parent=parse_int(fields[8]),
    )


_PARSERS = {
    DatasetKind.STREET: parse_street,
    DatasetKind.CITY: parse_city,
}


def _read_lines(path: Path) -> List[str]:
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        text = f.read()
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.replace("\r", "") for line in lines]


def load_records(path: Union[str, Path], kind: DatasetKind) -> LoadResult:
    """
    Parses a ULIC or SIMC export into records, in file order.

    The first line is a header and is dropped. Lines that do not have
    exactly ten fields, or whose name field is empty, are skipped and
    counted; they never abort the load.

    Args:
        path: Path to the semicolon-delimited export.
        kind: Which record type the file holds.

    Returns:
        LoadResult with the parsed records and the skip count.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    kind = DatasetKind(kind)
    if not path.exists():
        raise FileNotFoundError(f"{kind.value.capitalize()} dataset file not found: {path}")

    parse: Callable[[List[str]], Optional[object]] = _PARSERS[kind]
    result = LoadResult(kind=kind)

    lines = _read_lines(path)
    for line_num, line in enumerate(lines[1:], start=2):
        result.lines += 1
        fields = split_fields(line)
        if len(fields) != FIELD_COUNT:
            logger.debug(f"Skipping {path.name}:{line_num}, expected {FIELD_COUNT} fields, got {len(fields)}")
            result.skipped += 1
            continue

        record = parse(fields)
        if record is None:
            logger.debug(f"Skipping {path.name}:{line_num}, empty name field")
            result.skipped += 1
            continue

        result.records.append(record)

    return result


def load_streets(path: Union[str, Path]) -> LoadResult:
    return load_records(path, DatasetKind.STREET)


def load_cities(path: Union[str, Path]) -> LoadResult:
    return load_records(path, DatasetKind.CITY)
