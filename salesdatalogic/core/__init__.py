"""Core data structures and operations."""

from . import canon, exceptions, timegrid, types, utils

__all__ = ["canon", "exceptions", "timegrid", "types", "utils"]
