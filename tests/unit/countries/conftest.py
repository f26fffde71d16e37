"""
Shared fixtures for country resolution tests.

The fixture table is a small slice of the datahub country-codes CSV: the
UK and France rows carry the full reference values, the other rows only
what the tests need, and the last row has no ISO codes at all.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable

import pytest

from src.countries.core.properties import PROPERTIES
from src.countries.core.registry import CountryRegistry
from src.countries.core.resolver import CountryResolver

GB = {
    "iso3166_numeric": "826",
    "official_name_ar": "المملكة المتحدة لبريطانيا العظمى وآيرلندا الشمالية",
    "official_name_cn": "大不列颠及北爱尔兰联合王国",
    "official_name_en": "United Kingdom of Great Britain and Northern Ireland",
    "official_name_es": "Reino Unido de Gran Bretaña e Irlanda del Norte",
    "official_name_fr": "Royaume-Uni de Grande-Bretagne et d'Irlande du Nord",
    "official_name_ru": "Соединенное Королевство Великобритании и Северной Ирландии",
    "iso3166_alpha2": "GB",
    "iso3166_alpha3": "GBR",
    "unterm_formal_name_ar": "المملكة المتحدة لبريطانيا العظمى وآيرلندا الشمالية",
    "unterm_short_name_ar": "المملكة المتحدة لبريطانيا العظمى وآيرلندا الشمالية",
    "unterm_formal_name_cn": "大不列颠及北爱尔兰联合王国",
    "unterm_short_name_cn": "大不列颠及北爱尔兰联合王国",
    "unterm_formal_name_en": "the United Kingdom of Great Britain and Northern Ireland",
    "unterm_short_name_en": "United Kingdom of Great Britain and Northern Ireland (the)",
    "unterm_formal_name_es": "el Reino Unido de Gran Bretaña e Irlanda del Norte",
    "unterm_short_name_es": "Reino Unido de Gran Bretaña e Irlanda del Norte (el)",
    "unterm_formal_name_fr": "le Royaume-Uni de Grande- Bretagne et d'Irlande du Nord",
    "unterm_short_name_fr": "Royaume-Uni de Grande-Bretagne et d'Irlande du Nord (le)",
    "unterm_formal_name_ru": "Соединенное Королевство Великобритании и Северной Ирландии",
    "unterm_short_name_ru": "Соединенное Королевство Великобритании и Северной Ирландии",
    "cldr_name_en": "UK",
    "tld_name": ".uk",
    "wmo_code": "UK",
    "fips_code": "UK",
    "fifa_code": "ENG,NIR,SCO,WAL",
    "ioc_code": "GBR",
    "continent_code": "EU",
    "capital_name_en": "London",
}

FR = {
    "iso3166_numeric": "250",
    "official_name_ar": "فرنسا",
    "official_name_cn": "法国",
    "official_name_en": "France",
    "official_name_es": "Francia",
    "official_name_fr": "France",
    "official_name_ru": "Франция",
    "iso3166_alpha2": "FR",
    "iso3166_alpha3": "FRA",
    "unterm_formal_name_ar": "الجمهورية الفرنسية",
    "unterm_short_name_ar": "فرنسا",
    "unterm_formal_name_cn": "法兰西共和国",
    "unterm_short_name_cn": "法国",
    "unterm_formal_name_en": "the French Republic",
    "unterm_short_name_en": "France",
    "unterm_formal_name_es": "la República Francesa",
    "unterm_short_name_es": "Francia",
    "unterm_formal_name_fr": "la République française",
    "unterm_short_name_fr": "France (la)",
    "unterm_formal_name_ru": "Французская Республика",
    "unterm_short_name_ru": "Франция",
    "cldr_name_en": "France",
    "tld_name": ".fr",
    "wmo_code": "FR",
    "fips_code": "FR",
    "fifa_code": "FRA",
    "ioc_code": "FRA",
    "continent_code": "EU",
    "capital_name_en": "Paris",
}

US = {
    "iso3166_numeric": "840",
    "official_name_en": "United States of America",
    "iso3166_alpha2": "US",
    "iso3166_alpha3": "USA",
    "unterm_formal_name_en": "the United States of America",
    "unterm_short_name_en": "United States of America (the)",
    "cldr_name_en": "US",
    "tld_name": ".us",
    "fifa_code": "USA",
    "ioc_code": "USA",
    "continent_code": "NA",
    "capital_name_en": "Washington",
}

DE = {
    "iso3166_numeric": "276",
    "official_name_en": "Germany",
    "official_name_fr": "Allemagne",
    "iso3166_alpha2": "DE",
    "iso3166_alpha3": "DEU",
    "unterm_formal_name_en": "the Federal Republic of Germany",
    "unterm_short_name_en": "Germany",
    "cldr_name_en": "Germany",
    "tld_name": ".de",
    "fifa_code": "GER",
    "ioc_code": "GER",
    "continent_code": "EU",
    "capital_name_en": "Berlin",
}

NE = {
    "iso3166_numeric": "562",
    "official_name_en": "Niger",
    "iso3166_alpha2": "NE",
    "iso3166_alpha3": "NER",
    "unterm_formal_name_en": "the Republic of the Niger",
    "unterm_short_name_en": "Niger (the)",
    "cldr_name_en": "Niger",
    "continent_code": "AF",
    "capital_name_en": "Niamey",
}

NG = {
    "iso3166_numeric": "566",
    "official_name_en": "Nigeria",
    "iso3166_alpha2": "NG",
    "iso3166_alpha3": "NGA",
    "unterm_formal_name_en": "the Federal Republic of Nigeria",
    "unterm_short_name_en": "Nigeria",
    "cldr_name_en": "Nigeria",
    "continent_code": "AF",
    "capital_name_en": "Abuja",
}

# No ISO codes: in the table and the global lookup, but not in the catalog
SARK = {
    "cldr_name_en": "Sark",
}

ROWS = (GB, FR, US, DE, NE, NG, SARK)


def build_table(rows=ROWS) -> dict[str, list[str]]:
    """Column label -> cells for the given rows (missing values are empty)."""
    return {p.column: [row.get(p.name, "") for row in rows] for p in PROPERTIES}


def render_csv(table: dict[str, list[str]]) -> str:
    """Render a column table as CSV text with a header row."""
    out = io.StringIO()
    writer = csv.writer(out)
    labels = list(table)
    writer.writerow(labels)
    writer.writerows(zip(*(table[label] for label in labels)))
    return out.getvalue()


@pytest.fixture
def table() -> dict[str, list[str]]:
    return build_table()


@pytest.fixture
def table_factory() -> Callable[..., dict[str, list[str]]]:
    """Build a table with per-row property overrides: ``{row: {prop: value}}``."""

    def factory(overrides: dict[int, dict[str, str]] | None = None) -> dict[str, list[str]]:
        rows = [dict(row) for row in ROWS]
        for index, values in (overrides or {}).items():
            rows[index].update(values)
        return build_table(rows)

    return factory


@pytest.fixture
def csv_text(table) -> str:
    return render_csv(table)


@pytest.fixture
def csv_file(tmp_path, csv_text):
    path = tmp_path / "country-codes.csv"
    path.write_text(csv_text, encoding="utf-8")
    return path


@pytest.fixture
def registry(table) -> CountryRegistry:
    return CountryRegistry(table)


@pytest.fixture
def resolver(registry) -> CountryResolver:
    return CountryResolver(registry)


@pytest.fixture
def countries(registry):
    """Countries by alpha-2 code."""
    return {str(c.iso3166_alpha2): c for c in registry.catalog}
