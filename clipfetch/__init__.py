"""Stream extraction from video pages, with helpers for HTTP, file naming, worker pools and merging."""

__version__ = "0.1.0"