"""Countries - canonical country resolution over the ISO 3166 country-codes table."""

__version__ = "0.1.0"
