"""Input/output modules."""

from springdamper.io.exporter import ResponseExporter

__all__ = ["ResponseExporter"]
