"""Business logic service for the Application Tracker.

This module provides the ApplicationStore class which handles:
- Loading the collection at startup, falling back to empty on failure
- Identifier assignment for new applications
- Status/notes updates
- Filtering, search and statistics over the live collection

Every mutation ends with a full rewrite of the backing file.
"""

from dataclasses import replace
from datetime import date, timedelta

from src.tracker.dates import parse_application_date, parse_closing_date
from src.tracker.models import ApplicationStatistics, JobApplication, UpdateOutcome
from src.tracker.repository import (
    JsonApplicationRepository,
    RepositoryLoadError,
    RepositorySaveError,
)
from src.utils.logging import get_logger

logger = get_logger("tracker.service")

DEFAULT_UPCOMING_WINDOW_DAYS = 7


def parse_application_id(value: object) -> int | None:
    """Return the identifier held by ``value``, or None if it is not one.

    Accepts ints and strings of decimal digits (surrounding whitespace is
    ignored). Booleans are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isdecimal():
            try:
                return int(text)
            except ValueError:
                # Longer than the interpreter allows for int conversion
                return None
    return None


class ApplicationStore:
    """Owner of the job application collection.

    The store keeps the authoritative in-memory list of applications and
    the next identifier to assign. Callers pass the store explicitly.
    Every record handed out is a copy, so changes reach the collection
    (and the backing file) only through the store's own operations.
    """

    def __init__(
        self,
        repository: JsonApplicationRepository,
        upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
    ):
        """Initialize the store and load the backing file.

        Loading never raises. If the file is corrupt the store starts
        empty, leaves the file untouched and records the failure in
        ``load_error``.

        Args:
            repository: Repository for the backing file.
            upcoming_window_days: Size of the upcoming deadline window.
        """
        self.repository = repository
        self.upcoming_window_days = upcoming_window_days
        self._applications: list[JobApplication] = []
        self._next_id = 1
        self.load_error: str | None = None
        self.save_error: str | None = None
        self._load()

    @property
    def next_id(self) -> int:
        """The identifier the next added application will receive."""
        return self._next_id

    def _load(self) -> None:
        if not self.repository.exists():
            logger.debug(f"No data file at {self.repository.path}, starting empty")
            return

        try:
            applications = self.repository.load()
        except RepositoryLoadError as e:
            logger.error(f"Error loading data: {e}")
            self.load_error = str(e)
            self._applications = []
            self._next_id = 1
            return

        self._applications = applications
        self._next_id = max((app.id for app in applications), default=0) + 1
        logger.info(
            f"Loaded {len(applications)} applications from {self.repository.path}"
        )

    def _persist(self) -> bool:
        """Save the full collection.

        Returns:
            True if the save succeeded. On failure the in-memory state is
            kept as is and the error is recorded in ``save_error``.
        """
        try:
            self.repository.save(self._applications)
        except RepositorySaveError as e:
            logger.error(f"Error saving data: {e}")
            self.save_error = str(e)
            return False

        self.save_error = None
        return True

    def add(
        self,
        company: str,
        position: str,
        reference_number: str = "",
        application_date: str | date | None = None,
        closing_date: str | date | None = None,
        application_method: str = "",
        status: str = "",
        contact_person: str = "",
        contact_email: str = "",
        notes: str = "",
    ) -> JobApplication:
        """Add a new application and persist the collection.

        Unparseable dates are not rejected: the application date falls
        back to today and the closing date to None.

        Returns:
            The created application, with its assigned id.
        """
        application = JobApplication(
            id=self._next_id,
            company=company,
            position=position,
            reference_number=reference_number,
            application_date=parse_application_date(application_date),
            status=status,
            application_method=application_method,
            closing_date=parse_closing_date(closing_date),
            notes=notes,
            contact_person=contact_person,
            contact_email=contact_email,
        )
        self._next_id += 1
        self._applications.append(application)
        logger.info(
            f"Added application {application.id}: "
            f"{application.company} - {application.position}"
        )
        self._persist()
        return replace(application)

    def list_all(self) -> list[JobApplication]:
        """Return every application in insertion order."""
        return [replace(app) for app in self._applications]

    def get(self, app_id: int | str) -> JobApplication | None:
        """Return the application with the given id, or None."""
        parsed_id = parse_application_id(app_id)
        if parsed_id is None:
            return None
        application = self._find(parsed_id)
        return replace(application) if application is not None else None

    def _find(self, app_id: int) -> JobApplication | None:
        return next((app for app in self._applications if app.id == app_id), None)

    def list_by_status(self, status: str) -> list[JobApplication]:
        """Return applications whose status equals ``status``, ignoring case."""
        wanted = status.casefold()
        return [
            replace(app)
            for app in self._applications
            if app.status.casefold() == wanted
        ]

    def update_status(
        self, app_id: int | str, new_status: str, new_notes: str
    ) -> UpdateOutcome:
        """Overwrite the status and notes of an application.

        No other field changes. Any status text is accepted.

        Args:
            app_id: Identifier of the application, as an int or digit string.
            new_status: Replacement status text.
            new_notes: Replacement notes.

        Returns:
            UPDATED on success, NOT_FOUND if no application has that id,
            INVALID_ID if ``app_id`` is not an identifier.
        """
        parsed_id = parse_application_id(app_id)
        if parsed_id is None:
            logger.warning(f"Rejected update for invalid id {app_id!r}")
            return UpdateOutcome.INVALID_ID

        application = self._find(parsed_id)
        if application is None:
            logger.info(f"Application {parsed_id} not found")
            return UpdateOutcome.NOT_FOUND

        application.status = new_status
        application.notes = new_notes
        logger.info(f"Updated application {parsed_id} to status {new_status!r}")
        self._persist()
        return UpdateOutcome.UPDATED

    def search(self, term: str) -> list[JobApplication]:
        """Find applications whose company, position or reference contains ``term``.

        Matching is case-insensitive.
        """
        needle = term.casefold()
        return [
            replace(app)
            for app in self._applications
            if needle in app.company.casefold()
            or needle in app.position.casefold()
            or needle in app.reference_number.casefold()
        ]

    def statistics(self, today: date | None = None) -> ApplicationStatistics:
        """Summarize the collection.

        Args:
            today: Reference date for the deadline window (defaults to today).

        Returns:
            Total count, per-status counts in first-seen order, and the
            applications closing within [today, today + window], soonest first.
        """
        today = today or date.today()
        window_end = today + timedelta(days=self.upcoming_window_days)

        by_status: dict[str, int] = {}
        for app in self._applications:
            by_status[app.status] = by_status.get(app.status, 0) + 1

        upcoming = sorted(
            (
                replace(app)
                for app in self._applications
                if app.closing_date is not None
                and today <= app.closing_date <= window_end
            ),
            key=lambda app: app.closing_date,
        )

        return ApplicationStatistics(
            total=len(self._applications),
            by_status=by_status,
            upcoming=upcoming,
        )
