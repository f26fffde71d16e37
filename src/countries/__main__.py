"""
Countries - CLI Entry Point

Usage:
    python -m src.countries [command] [options]

Examples:
    python -m src.countries resolve UK FR 840
    python -m src.countries --csv-path ./country-codes.csv list
"""

from src.countries.cli import app

if __name__ == "__main__":
    app()
