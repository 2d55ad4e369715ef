"""Input/output: parsing raw uploads and persistence shapes."""

from . import dates, formats, ingest, report, store

__all__ = ["dates", "formats", "ingest", "report", "store"]
