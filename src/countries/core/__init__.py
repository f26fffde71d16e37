"""
Core country resolution logic.

This module contains the table, lookup and resolution logic,
independent of how the table is obtained or presented.
"""

from .models import Country
from .registry import CountryRegistry
from .resolver import CountryResolver

__all__ = ["Country", "CountryRegistry", "CountryResolver"]
