"""Main entry point for the Job Application Tracker."""

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from src import __version__
from src.config.settings import Settings
from src.tracker.formatting import format_applications, format_statistics
from src.tracker.models import ApplicationStatus, UpdateOutcome
from src.tracker.repository import JsonApplicationRepository
from src.tracker.service import ApplicationStore, parse_application_id
from src.utils.logging import configure_logging

STATUS_CHOICES = "/".join(
    status.value
    for status in ApplicationStatus
    if status is not ApplicationStatus.OTHER
)

MENU = """=== JOB APPLICATION TRACKER MENU ===
1. Add New Application
2. View All Applications
3. View Applications by Status
4. Update Application Status
5. Search Applications
6. Show Statistics
7. Exit"""

InputFunc = Callable[[str], str]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="job-tracker",
        description="Job Application Tracker: keep a local record of job applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src add --company Acme --position "Backend Engineer" --closing 2025-01-10
  python -m src list --status interview
  python -m src update 3 --status Interview --notes "called back"
  python -m src menu
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Override the applications file (defaults to settings)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands (defaults to the interactive menu)",
    )

    add_parser = subparsers.add_parser("add", help="Add a new application")
    add_parser.add_argument("--company", type=str, required=True, help="Company name")
    add_parser.add_argument(
        "--position", type=str, required=True, help="Position applied for"
    )
    add_parser.add_argument(
        "--reference", type=str, default="", help="Vacancy reference number"
    )
    add_parser.add_argument(
        "--applied",
        type=str,
        default=None,
        help="Application date (yyyy-mm-dd, defaults to today)",
    )
    add_parser.add_argument(
        "--closing", type=str, default=None, help="Closing date (yyyy-mm-dd)"
    )
    add_parser.add_argument(
        "--method", type=str, default="", help="Application method (Email/Online/Post)"
    )
    add_parser.add_argument(
        "--status",
        type=str,
        default=ApplicationStatus.APPLIED.value,
        help=f"Status ({STATUS_CHOICES})",
    )
    add_parser.add_argument(
        "--contact-person", type=str, default="", help="Contact person"
    )
    add_parser.add_argument(
        "--contact-email", type=str, default="", help="Contact email"
    )
    add_parser.add_argument("--notes", type=str, default="", help="Notes")

    list_parser = subparsers.add_parser("list", help="List applications")
    list_parser.add_argument(
        "--status",
        type=str,
        default=None,
        help="Only show applications with this status (case-insensitive)",
    )

    update_parser = subparsers.add_parser(
        "update", help="Update the status and notes of an application"
    )
    update_parser.add_argument("id", type=str, help="Application ID")
    update_parser.add_argument(
        "--status", type=str, required=True, help=f"New status ({STATUS_CHOICES})"
    )
    update_parser.add_argument(
        "--notes", type=str, default="", help="Replacement notes"
    )

    search_parser = subparsers.add_parser(
        "search", help="Search company, position and reference number"
    )
    search_parser.add_argument("term", type=str, help="Search term")

    subparsers.add_parser("stats", help="Show statistics and upcoming deadlines")
    subparsers.add_parser("menu", help="Interactive menu")

    return parser


def _print_update_outcome(outcome: UpdateOutcome) -> None:
    if outcome is UpdateOutcome.UPDATED:
        print("Application updated successfully!")
    elif outcome is UpdateOutcome.NOT_FOUND:
        print("Application not found!")
    else:
        print("Invalid ID!")


def _report_save_error(store: ApplicationStore) -> bool:
    if store.save_error:
        print(f"Error saving data: {store.save_error}", file=sys.stderr)
        return True
    return False


def _update_interactively(
    store: ApplicationStore, app_id: str, read: InputFunc
) -> UpdateOutcome:
    # Only prompt for the new values once the id is known to exist.
    if parse_application_id(app_id) is None:
        return UpdateOutcome.INVALID_ID
    if store.get(app_id) is None:
        return UpdateOutcome.NOT_FOUND

    new_status = read(f"New Status ({STATUS_CHOICES}): ")
    new_notes = read("Update Notes: ")
    return store.update_status(app_id, new_status, new_notes)


def run_menu(store: ApplicationStore, read: InputFunc = input) -> int:
    """Run the interactive numbered menu until the user exits.

    Args:
        store: The application store to operate on.
        read: Prompt-and-read function (``input`` by default).

    Returns:
        Exit code (always 0; end of input exits the menu).
    """
    print("=== JOB APPLICATION TRACKER ===")

    while True:
        print()
        print(MENU)
        try:
            choice = read("Choose an option (1-7): ").strip()
        except EOFError:
            return 0

        try:
            if choice == "1":
                print("\n=== ADD NEW JOB APPLICATION ===")
                app = store.add(
                    company=read("Company: "),
                    position=read("Position: "),
                    reference_number=read("Reference Number: "),
                    application_date=read("Application Date (yyyy-mm-dd): "),
                    closing_date=read("Closing Date (yyyy-mm-dd): "),
                    application_method=read("Application Method (Email/Online/Post): "),
                    status=read(f"Status ({STATUS_CHOICES}): "),
                    contact_person=read("Contact Person: "),
                    contact_email=read("Contact Email: "),
                    notes=read("Notes: "),
                )
                if not _report_save_error(store):
                    print(f"Application added successfully! (ID {app.id})")
            elif choice == "2":
                print("\n=== ALL JOB APPLICATIONS ===")
                print(format_applications(store.list_all()))
            elif choice == "3":
                status = read(f"Enter status to filter ({STATUS_CHOICES}): ")
                print(f"\n=== APPLICATIONS WITH STATUS: {status.upper()} ===")
                print(
                    format_applications(
                        store.list_by_status(status),
                        empty_message="No applications found with this status.",
                    )
                )
            elif choice == "4":
                app_id = read("Enter Application ID to update: ")
                outcome = _update_interactively(store, app_id, read)
                _print_update_outcome(outcome)
                if outcome is UpdateOutcome.UPDATED:
                    _report_save_error(store)
            elif choice == "5":
                term = read("Search term (company/position/reference): ")
                print(f"\n=== SEARCH RESULTS FOR: '{term}' ===")
                print(format_applications(store.search(term)))
            elif choice == "6":
                print("\n=== APPLICATION STATISTICS ===")
                print(
                    format_statistics(
                        store.statistics(), window_days=store.upcoming_window_days
                    )
                )
            elif choice == "7":
                print("Good luck with your job search!")
                return 0
            else:
                print("Invalid choice. Please try again.")
        except EOFError:
            return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    data_file = parsed.data_file or settings.data_file
    command = parsed.command or "menu"
    logger.debug(f"Job tracker v{__version__} running {command} on {data_file}")

    store = ApplicationStore(
        JsonApplicationRepository(data_file),
        upcoming_window_days=settings.upcoming_window_days,
    )
    if store.load_error:
        print(f"Error loading data: {store.load_error}", file=sys.stderr)

    if command == "menu":
        return run_menu(store)

    if command == "add":
        app = store.add(
            company=parsed.company,
            position=parsed.position,
            reference_number=parsed.reference,
            application_date=parsed.applied,
            closing_date=parsed.closing,
            application_method=parsed.method,
            status=parsed.status,
            contact_person=parsed.contact_person,
            contact_email=parsed.contact_email,
            notes=parsed.notes,
        )
        if _report_save_error(store):
            return 1
        print(f"Application added successfully! (ID {app.id})")
        return 0

    if command == "list":
        if parsed.status is None:
            print(format_applications(store.list_all()))
        else:
            print(
                format_applications(
                    store.list_by_status(parsed.status),
                    empty_message="No applications found with this status.",
                )
            )
        return 0

    if command == "update":
        outcome = store.update_status(parsed.id, parsed.status, parsed.notes)
        _print_update_outcome(outcome)
        if outcome is not UpdateOutcome.UPDATED or _report_save_error(store):
            return 1
        return 0

    if command == "search":
        print(format_applications(store.search(parsed.term)))
        return 0

    if command == "stats":
        print(
            format_statistics(
                store.statistics(), window_days=store.upcoming_window_days
            )
        )
        return 0

    print(f"Unknown command: {command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
