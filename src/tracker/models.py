"""Data models for the Application Tracker."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class ApplicationStatus(str, Enum):
    """Well-known status values for a job application.

    Records store status as free text; this enum is a normalized view
    of that text for callers that want a closed set of values.
    """

    APPLIED = "Applied"
    INTERVIEW = "Interview"
    REJECTED = "Rejected"
    OFFERED = "Offered"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> "ApplicationStatus":
        """Map free-form status text to a known status.

        Matching ignores case and surrounding whitespace. Unrecognized
        text maps to OTHER.
        """
        if value is None:
            return cls.OTHER
        normalized = value.strip().casefold()
        for status in cls:
            if status.value.casefold() == normalized:
                return status
        return cls.OTHER


class UpdateOutcome(str, Enum):
    """Result of a status update."""

    UPDATED = "updated"
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"


def _parse_stored_date(value: str | date | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Accept full timestamps as well so older files keep loading.
    if "T" in value or " " in value.strip():
        return datetime.fromisoformat(value.strip()).date()
    return date.fromisoformat(value.strip())


@dataclass
class JobApplication:
    """A tracked job application.

    Attributes:
        id: Identifier assigned by the store.
        company: Name of the company.
        position: Title of the position applied for.
        reference_number: Employer's reference for the vacancy.
        application_date: When the application was made.
        status: Free-form status text (usually Applied/Interview/Rejected/Offered).
        application_method: How the application was sent (Email/Online/Post).
        closing_date: Vacancy closing date, if known.
        notes: Free-form notes.
        contact_person: Name of the recruiter or hiring contact.
        contact_email: Email address of the contact.
    """

    id: int
    company: str
    position: str
    application_date: date
    reference_number: str = ""
    status: str = ""
    application_method: str = ""
    closing_date: date | None = None
    notes: str = ""
    contact_person: str = ""
    contact_email: str = field(default="")

    @property
    def status_category(self) -> ApplicationStatus:
        """The record's status mapped onto ApplicationStatus."""
        return ApplicationStatus.parse(self.status)

    def to_dict(self) -> dict:
        """Serialize the record to a dictionary.

        Returns:
            Dictionary representation of the record, keyed by the
            backing file's field names.
        """
        return {
            "Id": self.id,
            "Company": self.company,
            "Position": self.position,
            "ReferenceNumber": self.reference_number,
            "ApplicationDate": self.application_date.isoformat(),
            "Status": self.status,
            "ApplicationMethod": self.application_method,
            "ClosingDate": self.closing_date.isoformat()
            if self.closing_date
            else None,
            "Notes": self.notes,
            "ContactPerson": self.contact_person,
            "ContactEmail": self.contact_email,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobApplication":
        """Deserialize a record from a dictionary.

        Args:
            data: Dictionary containing record data.

        Returns:
            JobApplication instance.

        Raises:
            KeyError: If the id or application date is missing.
            ValueError: If a field holds a value of the wrong shape.
        """
        app_id = data["Id"]
        if isinstance(app_id, bool) or not isinstance(app_id, int):
            raise ValueError(f"Invalid application id: {app_id!r}")

        application_date = _parse_stored_date(data["ApplicationDate"])
        if application_date is None:
            raise ValueError(f"Application {app_id} has no application date")

        def text(key: str) -> str:
            value = data.get(key)
            if value is None:
                return ""
            if not isinstance(value, str):
                raise ValueError(f"Field {key} of application {app_id} is not text")
            return value

        return cls(
            id=app_id,
            company=text("Company"),
            position=text("Position"),
            reference_number=text("ReferenceNumber"),
            application_date=application_date,
            status=text("Status"),
            application_method=text("ApplicationMethod"),
            closing_date=_parse_stored_date(data.get("ClosingDate")),
            notes=text("Notes"),
            contact_person=text("ContactPerson"),
            contact_email=text("ContactEmail"),
        )


@dataclass
class ApplicationStatistics:
    """Summary of the tracked applications.

    Attributes:
        total: Number of applications.
        by_status: Count per status text, in the order statuses first appear.
        upcoming: Applications closing within the deadline window, soonest first.
    """

    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    upcoming: list[JobApplication] = field(default_factory=list)
