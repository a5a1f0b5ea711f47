"""I/O utilities for reading and writing menu files."""

from . import readers
from . import writers

__all__ = ["readers", "writers"]
