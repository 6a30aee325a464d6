"""Query large JSON array files as filterable, paginated record sets."""

__version__ = "0.1.0"
