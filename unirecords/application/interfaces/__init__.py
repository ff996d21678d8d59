"""Application interfaces (ports) implemented by infrastructure."""

from unirecords.application.interfaces.repositories import IRecordSource

__all__ = ["IRecordSource"]
