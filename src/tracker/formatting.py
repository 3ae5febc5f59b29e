"""Plain-text rendering of applications and statistics."""

from collections.abc import Sequence

from src.tracker.models import ApplicationStatistics, JobApplication

SEPARATOR = "------------------------"
EMPTY_MESSAGE = "No applications found."


def format_application(app: JobApplication) -> str:
    """Render one application as a multi-line block."""
    closes = app.closing_date.isoformat() if app.closing_date else "-"
    lines = [
        f"ID: {app.id}",
        f"Company: {app.company}",
        f"Position: {app.position}",
        f"Ref No: {app.reference_number}",
        f"Applied: {app.application_date.isoformat()}",
        f"Closes: {closes}",
        f"Method: {app.application_method}",
        f"Status: {app.status}",
        f"Contact: {app.contact_person} ({app.contact_email})",
        f"Notes: {app.notes}",
    ]
    return "\n".join(lines)


def format_applications(
    apps: Sequence[JobApplication], empty_message: str = EMPTY_MESSAGE
) -> str:
    """Render applications separated by dashed lines."""
    if not apps:
        return empty_message
    return "\n".join(f"{format_application(app)}\n{SEPARATOR}" for app in apps)


def format_statistics(stats: ApplicationStatistics, window_days: int = 7) -> str:
    """Render totals, per-status counts and upcoming deadlines."""
    lines = [f"Total Applications: {stats.total}"]
    lines.extend(f"{status}: {count}" for status, count in stats.by_status.items())

    if stats.upcoming:
        lines.append("")
        lines.append(f"=== UPCOMING DEADLINES (Next {window_days} days) ===")
        for app in stats.upcoming:
            lines.append(
                f"{app.company} - {app.position} - Due: {app.closing_date.isoformat()}"
            )

    return "\n".join(lines)
