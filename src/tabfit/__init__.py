"""tabfit — render query results into a fixed-width terminal table."""

__version__ = "0.1.0"
