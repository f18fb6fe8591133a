"""Maintenance scripts — run with `python -m catalog.scripts.<name>`."""
