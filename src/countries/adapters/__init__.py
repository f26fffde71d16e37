"""Adapters for loading the country table and exporting countries."""
