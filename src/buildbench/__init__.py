"""buildbench – tabular reports for build benchmark results."""

__version__ = "0.1.0"
