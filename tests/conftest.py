"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from src.config.settings import reset_settings
from src.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Give every test fresh settings and unconfigured logging."""
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def data_file(tmp_path):
    """Path to a backing file that does not exist yet."""
    return tmp_path / "jobApplications.json"


@pytest.fixture
def sample_fields() -> dict:
    """Field values for a typical application."""
    return {
        "company": "Acme Corp",
        "position": "Backend Engineer",
        "reference_number": "REF-001",
        "application_date": date(2024, 12, 20),
        "closing_date": date(2025, 1, 10),
        "application_method": "Online",
        "status": "Applied",
        "contact_person": "Jane Smith",
        "contact_email": "jane@acme.example",
        "notes": "Referred by Sam",
    }
