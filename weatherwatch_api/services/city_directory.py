"""
City Directory

Loads the static world-cities CSV once at startup into an immutable,
name-sorted sequence of CityRecord values. The resulting CityDirectory is
owned by the application (app.state) and handed to request handlers through
dependency injection; nothing mutates it after load.
"""

import csv
import unicodedata
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Tuple, Union

from pydantic import ValidationError

from weatherwatch_core.errors import DirectoryLoadError
from weatherwatch_core.logger import logger
from weatherwatch_core.models import CityRecord

# Source columns kept for each city (everything else in the CSV is dropped)
CITY_COLUMNS = ("city", "country", "iso2", "iso3", "lat", "lng", "population", "capital")


def collation_key(name: str) -> Tuple[str, str]:
    """
    Locale-independent sort key for city names.

    Accents are stripped and case is folded so "Ålesund" sorts with the A's
    and "berlin" next to "Berlin"; the raw name breaks ties deterministically.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def project_row(row: Mapping[str, object]) -> CityRecord:
    """Select the directory columns from one source row"""
    return CityRecord.model_validate({column: row.get(column) for column in CITY_COLUMNS})


class CityDirectory:
    """Read-only, sorted collection of cities"""

    def __init__(self, records: Iterable[CityRecord]):
        self._records: Tuple[CityRecord, ...] = tuple(
            sorted(records, key=lambda record: collation_key(record.city))
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, object]]) -> "CityDirectory":
        """Build a directory from raw source rows (e.g. csv.DictReader output)"""
        return cls(project_row(row) for row in rows)

    def list_cities(self) -> Tuple[CityRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CityRecord]:
        return iter(self._records)


def load_city_directory(path: Union[str, Path]) -> CityDirectory:
    """
    Stream-parse the cities CSV and build the directory.

    Args:
        path: CSV file with at least a ``city`` header column

    Returns:
        CityDirectory sorted by city name

    Raises:
        DirectoryLoadError: file missing/unreadable, or rows cannot be parsed
    """
    path = Path(path)
    logger.info(f"Loading cities from {path}")

    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.DictReader(handle)
            if not reader.fieldnames or "city" not in reader.fieldnames:
                raise DirectoryLoadError(str(path), "missing 'city' header column")
            directory = CityDirectory.from_rows(reader)
    except DirectoryLoadError:
        raise
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DirectoryLoadError(str(path), str(e)) from e
    except ValidationError as e:
        raise DirectoryLoadError(str(path), f"malformed row: {e.errors()[0]['msg']}") from e

    logger.info(f"Loaded {len(directory)} cities from CSV (sorted)")
    return directory
