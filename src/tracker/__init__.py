"""Application tracking store and queries.

This module provides the Application Tracker system for recording job
applications in a local JSON file and querying them.

Public API:
- ApplicationStore: Owner of the collection and its operations
- JsonApplicationRepository: Backing file repository
- JobApplication: Data model for one application
- ApplicationStatus: Enum of well-known status values
- ApplicationStatistics: Result of ApplicationStore.statistics()
- UpdateOutcome: Result of ApplicationStore.update_status()
"""

from src.tracker.models import (
    ApplicationStatistics,
    ApplicationStatus,
    JobApplication,
    UpdateOutcome,
)
from src.tracker.repository import JsonApplicationRepository
from src.tracker.service import ApplicationStore

__all__ = [
    "ApplicationStore",
    "JsonApplicationRepository",
    "JobApplication",
    "ApplicationStatus",
    "ApplicationStatistics",
    "UpdateOutcome",
]
