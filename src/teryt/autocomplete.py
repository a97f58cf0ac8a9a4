"""
In-memory autocomplete service for TERYT street and locality names.
Holds both datasets in memory and answers prefix/substring lookups with a
linear scan, which is fast enough for a few hundred thousand records.
"""

import time
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .loader import DatasetKind, LoadResult, load_records
from .models import CityRecord, MunicipalityCode, StreetRecord
from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


def _rank_key(name: str, query: str) -> Tuple[bool, str]:
    # Prefix matches sort first, then plain byte-order on the original name
    return (not name.lower().startswith(query), name)


class AutocompleteService:
    """
    Street and locality autocomplete over the ULIC and SIMC datasets.

    Both record lists sit behind a single reader/writer lock: searches
    share it, loads take it exclusively. Searches scan in file order and
    stop after `limit` distinct matches, then rank what they collected.
    """

    def __init__(self):
        self.streets: List[StreetRecord] = []
        self.cities: List[CityRecord] = []
        self.lock = ReadWriteLock()
        self.sources: Dict[DatasetKind, Optional[Path]] = {
            DatasetKind.STREET: None,
            DatasetKind.CITY: None,
        }
        self.load_times: Dict[DatasetKind, Optional[float]] = {
            DatasetKind.STREET: None,
            DatasetKind.CITY: None,
        }

    @property
    def loaded(self) -> bool:
        return all(source is not None for source in self.sources.values())

    def _load(self, path: Union[str, Path], kind: DatasetKind) -> LoadResult:
        with self.lock.write_locked():
            start_time = time.time()
            logger.info(f"Loading {kind.value} data from {path}...")

            result = load_records(path, kind)
            if kind is DatasetKind.STREET:
                self.streets = result.records
            else:
                self.cities = result.records

            self.sources[kind] = Path(path)
            self.load_times[kind] = time.time() - start_time

        logger.info(
            f"Loaded {len(result.records):,} {kind.value} records from {path} "
            f"(skipped {result.skipped:,} malformed records) in {self.load_times[kind]:.3f} seconds"
        )
        return result

    def load_streets(self, path: Union[str, Path]) -> LoadResult:
        """
        Load the ULIC street export, replacing any streets loaded before.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        return self._load(path, DatasetKind.STREET)

    def load_cities(self, path: Union[str, Path]) -> LoadResult:
        """
        Load the SIMC locality export, replacing any localities loaded before.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        return self._load(path, DatasetKind.CITY)

    def search_streets(self, query: str, limit: int = 10) -> List[StreetRecord]:
        """
        Search streets whose main name (NAZWA_1) starts with or contains the query.

        An empty query returns nothing. Results are unique by full name,
        prefix matches first, each group in name order.

        Args:
            query: Text typed by the user (case-insensitive)
            limit: Maximum number of results to return

        Returns:
            List of matching street records (up to limit)
        """
        if not query or limit <= 0:
            return []

        query_lower = query.strip().lower()
        results: List[StreetRecord] = []
        seen = set()

        with self.lock.read_locked():
            for street in self.streets:
                if len(results) >= limit:
                    break
                if query_lower not in street.name.lower():
                    continue
                if street.full_name in seen:
                    continue
                seen.add(street.full_name)
                results.append(street)

        results.sort(key=lambda street: _rank_key(street.name, query_lower))
        return results

    def search_cities(
        self,
        query: str,
        woj: int = 0,
        pow: int = 0,
        gmi: int = 0,
        limit: int = 10,
    ) -> List[CityRecord]:
        """
        Search localities by name, optionally restricted to an administrative unit.

        A filter value of 0 means "any". Unlike street search, an empty
        query matches every locality that passes the filters.

        Args:
            query: Text typed by the user (case-insensitive), may be empty
            woj: Voivodeship code filter
            pow: County code filter
            gmi: Municipality code filter
            limit: Maximum number of results to return

        Returns:
            List of matching locality records (up to limit)
        """
        if limit <= 0:
            return []

        query_lower = (query or "").strip().lower()
        results: List[CityRecord] = []
        seen = set()

        with self.lock.read_locked():
            for city in self.cities:
                if len(results) >= limit:
                    break
                if woj > 0 and city.woj != woj:
                    continue
                if pow > 0 and city.pow != pow:
                    continue
                if gmi > 0 and city.gmi != gmi:
                    continue
                if query_lower and query_lower not in city.name.lower():
                    continue

                key = (city.name, city.woj, city.pow, city.gmi)
                if key in seen:
                    continue
                seen.add(key)
                results.append(city)

        if query_lower:
            results.sort(key=lambda city: _rank_key(city.name, query_lower))
        else:
            results.sort(key=lambda city: city.name)
        return results

    def gmi_for_street(self, name: str) -> List[MunicipalityCode]:
        """
        Return every municipality that has a street named exactly `name`.

        Matching is case-insensitive against NAZWA_1 only, so "Chopina"
        does not match "Fryderyka Chopina".
        """
        name_lower = (name or "").strip().lower()
        if not name_lower:
            return []

        codes = set()
        with self.lock.read_locked():
            for street in self.streets:
                if street.name.lower() == name_lower:
                    codes.add(MunicipalityCode(street.woj, street.pow, street.gmi))

        return sorted(codes)

    def get_stats(self) -> dict:
        """
        Get statistics about the autocomplete service.

        Returns:
            Dictionary with stats
        """
        with self.lock.read_locked():
            street_count = len(self.streets)
            city_count = len(self.cities)

        return {
            "loaded": self.loaded,
            "total_streets": street_count,
            "total_cities": city_count,
            "streets_file": str(self.sources[DatasetKind.STREET]) if self.sources[DatasetKind.STREET] else None,
            "cities_file": str(self.sources[DatasetKind.CITY]) if self.sources[DatasetKind.CITY] else None,
            "streets_load_time_seconds": self.load_times[DatasetKind.STREET],
            "cities_load_time_seconds": self.load_times[DatasetKind.CITY],
        }
