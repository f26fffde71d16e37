"""
Country Table Export

Materializes countries as rows x named columns using only the public
Country accessors.

Usage:
    from src.countries.adapters.export import to_records, write_csv

    records = to_records(resolver.registry.catalog, ["iso3166_alpha3", "official_name_en"])
    write_csv(resolver.registry.catalog, "countries.csv")
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from src.countries.core.models import Country


def _columns(countries: Sequence[Country], properties: Sequence[str] | None) -> tuple[str, ...]:
    if properties is not None:
        return tuple(properties)
    if not countries:
        return ()
    return countries[0].registry.property_names


def to_records(
    countries: Iterable[Country],
    properties: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """
    One dict per country.

    Args:
        countries: Countries to export (e.g. a registry's catalog)
        properties: Property names to include; all declared properties by default

    Raises:
        KeyError: Unknown property name
    """
    countries = list(countries)
    columns = _columns(countries, properties)
    return [{name: country.get(name) for name in columns} for country in countries]


def to_columns(
    countries: Iterable[Country],
    properties: Sequence[str] | None = None,
) -> dict[str, list[Any]]:
    """One list of values per property, aligned with the country order."""
    countries = list(countries)
    columns = _columns(countries, properties)
    return {name: [country.get(name) for country in countries] for name in columns}


def write_csv(
    countries: Iterable[Country],
    output_path: str | Path,
    properties: Sequence[str] | None = None,
) -> Path:
    """Write countries to a CSV file with one column per property."""
    countries = list(countries)
    columns = _columns(countries, properties)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns))
        writer.writeheader()
        writer.writerows(to_records(countries, columns))

    return output_path
