#!/usr/bin/env python3

"""
Load a single TERYT export (ULIC or SIMC) and report what the loader made of it.
Handy after downloading a new registry snapshot, before pointing the API at it.
"""

import sys
import os
import time

# Add the src directory to the Python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from teryt.autocomplete import AutocompleteService
from teryt.loader import DatasetKind


def inspect_dataset(path: str, kind: DatasetKind, query: str = None, limit: int = 10) -> int:
    """
    Load one dataset and print record counts, a sample, and optional search results.

    Args:
        path: Path to the CSV export
        kind: Which registry the file holds
        query: Optional search to run against the loaded data
        limit: Maximum number of search results to print

    Returns:
        Number of records loaded
    """
    service = AutocompleteService()

    print(f"Loading {kind.value} data from {path}...")
    start_time = time.time()
    if kind is DatasetKind.STREET:
        result = service.load_streets(path)
    else:
        result = service.load_cities(path)
    elapsed = time.time() - start_time

    print(f"Data lines:  {result.lines:,}")
    print(f"Records:     {len(result.records):,}")
    print(f"Skipped:     {result.skipped:,}")
    print(f"Load time:   {elapsed:.3f} seconds")

    print("\nFirst few records:")
    for record in result.records[:5]:
        print(f"  {record!r}")

    if query is not None:
        print(f"\nSearch results for '{query}':")
        if kind is DatasetKind.STREET:
            for street in service.search_streets(query, limit):
                print(f"  {street.full_name} ({street.woj}/{street.pow}/{street.gmi})")
            codes = service.gmi_for_street(query)
            if codes:
                print(f"\nMunicipalities with a street named exactly '{query}':")
                for code in codes:
                    print(f"  {code.woj}/{code.pow}/{code.gmi}")
        else:
            for city in service.search_cities(query, limit=limit):
                print(f"  {city.name} ({city.woj}/{city.pow}/{city.gmi})")

    return len(result.records)


def main():
    """Main function to run the inspection."""
    import argparse

    parser = argparse.ArgumentParser(description="Inspect a TERYT ULIC or SIMC export")
    parser.add_argument("path", help="Path to the CSV export")
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in DatasetKind],
        default=DatasetKind.STREET.value,
        help="Dataset type (default: street)"
    )
    parser.add_argument("--query", help="Run a search against the loaded data")
    parser.add_argument("--limit", type=int, default=10, help="Maximum search results (default: 10)")

    args = parser.parse_args()

    try:
        inspect_dataset(args.path, DatasetKind(args.kind), args.query, args.limit)
    except OSError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
