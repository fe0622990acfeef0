"""Persistence contracts (DTOs and protocols) for the audit-log store."""

from .repos import EventRecord, IEventRepo, IUnitOfWork

__all__ = ["EventRecord", "IEventRepo", "IUnitOfWork"]
