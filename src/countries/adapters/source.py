"""
Country Table Source

Fetches and parses the "country-codes" CSV published on datahub.io into
the column mapping consumed by CountryRegistry.
"""

from __future__ import annotations

import csv
import io
import logging
import os
import tempfile
from pathlib import Path

import httpx

from src.countries.config import CountriesConfig
from src.countries.exceptions import DownloadError, InvalidTableError, TableNotFoundError

logger = logging.getLogger(__name__)


def parse_csv(text: str) -> dict[str, list[str]]:
    """
    Parse CSV text into column label -> cells.

    Args:
        text: CSV content with a header row

    Returns:
        One list of raw cell text per column, all of equal length

    Raises:
        InvalidTableError: Empty input or a row with the wrong number of fields
    """
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    try:
        header = next(reader)
    except StopIteration:
        raise InvalidTableError("Country table is empty") from None

    columns: dict[str, list[str]] = {label: [] for label in header}
    for line_no, row in enumerate(reader, start=2):
        if not row:
            continue
        if len(row) != len(header):
            raise InvalidTableError(
                f"Line {line_no}: expected {len(header)} fields, got {len(row)}"
            )
        for label, cell in zip(header, row):
            columns[label].append(cell)
    return columns


def read_table(path: str | Path) -> dict[str, list[str]]:
    """Read and parse a country table CSV file."""
    path = Path(path)
    if not path.exists():
        raise TableNotFoundError(str(path))
    return parse_csv(path.read_text(encoding="utf-8-sig"))


def download_table(
    url: str,
    dest: str | Path,
    timeout_seconds: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> Path:
    """
    Download the country table CSV.

    The file is written to a temporary sibling first and then moved into
    place, so ``dest`` never holds a partial download.

    Args:
        url: CSV location
        dest: Target file path (parent directories are created)
        timeout_seconds: HTTP timeout
        transport: Optional httpx transport (tests use httpx.MockTransport)

    Returns:
        Path of the written file

    Raises:
        DownloadError: Network failure or non-2xx response
    """
    dest = Path(dest)
    logger.info(f"Downloading country table from {url}")

    try:
        with httpx.Client(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DownloadError(
            f"HTTP {e.response.status_code} while downloading {url}",
            url=url,
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise DownloadError(f"Failed to download {url}: {e}", url=url) from e

    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(response.content)
        os.replace(tmp_name, dest)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Saved country table to {dest} ({len(response.content)} bytes)")
    return dest


def load_table(
    config: CountriesConfig,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, list[str]]:
    """
    Load the configured country table, downloading it first if missing.

    Raises:
        TableNotFoundError: File missing and downloads are disabled
        DownloadError: Download failed
        InvalidTableError: File is malformed
    """
    path = Path(config.csv_path)
    if not path.exists():
        if not config.download_if_missing:
            raise TableNotFoundError(
                str(path), hint="Set COUNTRIES_DOWNLOAD_IF_MISSING=true or run 'countries download'"
            )
        download_table(config.csv_url, path, config.timeout_seconds, transport=transport)
    return read_table(path)
