from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from src.tracker.repository import JsonApplicationRepository
from src.tracker.service import ApplicationStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("DATA_FILE", "UPCOMING_WINDOW_DAYS", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def _scripted(answers: list[str]):
    replies = iter(answers)
    prompts: list[str] = []

    def read(prompt: str) -> str:
        prompts.append(prompt)
        try:
            return next(replies)
        except StopIteration:
            raise EOFError from None

    read.prompts = prompts
    return read


def _run(data_file, *args: str) -> int:
    from src.__main__ import main

    return main(["--data-file", str(data_file), *args])


def test_cli_add_then_list(data_file, capsys) -> None:
    exit_code = _run(
        data_file,
        "add",
        "--company",
        "Acme Corp",
        "--position",
        "Backend Engineer",
        "--closing",
        "2025-01-10",
    )

    assert exit_code == 0
    assert "Application added successfully! (ID 1)" in capsys.readouterr().out

    assert _run(data_file, "list") == 0
    out = capsys.readouterr().out
    assert "Company: Acme Corp" in out
    assert "Closes: 2025-01-10" in out
    assert "Status: Applied" in out


def test_cli_list_by_status(data_file, capsys) -> None:
    _run(data_file, "add", "--company", "A", "--position", "p", "--status", "Interview")
    _run(data_file, "add", "--company", "B", "--position", "p")
    capsys.readouterr()

    assert _run(data_file, "list", "--status", "interview") == 0
    out = capsys.readouterr().out
    assert "Company: A" in out
    assert "Company: B" not in out

    _run(data_file, "list", "--status", "offered")
    assert "No applications found with this status." in capsys.readouterr().out


def test_cli_update_outcomes(data_file, capsys) -> None:
    _run(data_file, "add", "--company", "Acme", "--position", "p")
    capsys.readouterr()

    assert _run(data_file, "update", "1", "--status", "Interview", "--notes", "x") == 0
    assert "Application updated successfully!" in capsys.readouterr().out

    assert _run(data_file, "update", "42", "--status", "Offered") == 1
    assert "Application not found!" in capsys.readouterr().out

    assert _run(data_file, "update", "abc", "--status", "Offered") == 1
    assert "Invalid ID!" in capsys.readouterr().out

    stored = json.loads(data_file.read_text(encoding="utf-8"))
    assert stored[0]["Status"] == "Interview"
    assert stored[0]["Notes"] == "x"


def test_cli_search_and_stats(data_file, capsys) -> None:
    soon = (date.today() + timedelta(days=3)).isoformat()
    _run(
        data_file,
        "add",
        "--company",
        "Acme Corp",
        "--position",
        "Dev",
        "--closing",
        soon,
    )
    _run(data_file, "add", "--company", "Globex", "--position", "Analyst")
    capsys.readouterr()

    assert _run(data_file, "search", "corp") == 0
    out = capsys.readouterr().out
    assert "Acme Corp" in out
    assert "Globex" not in out

    assert _run(data_file, "stats") == 0
    out = capsys.readouterr().out
    assert "Total Applications: 2" in out
    assert "Applied: 2" in out
    assert f"Acme Corp - Dev - Due: {soon}" in out


def test_cli_reports_corrupt_file(data_file, capsys) -> None:
    data_file.write_text("garbage", encoding="utf-8")

    assert _run(data_file, "list") == 0

    captured = capsys.readouterr()
    assert "Error loading data" in captured.err
    assert "No applications found." in captured.out


def test_cli_uses_data_file_from_environment(monkeypatch, tmp_path, capsys) -> None:
    from src.__main__ import main

    path = tmp_path / "env.json"
    monkeypatch.setenv("DATA_FILE", str(path))

    assert main(["add", "--company", "Acme", "--position", "p"]) == 0
    assert path.exists()


def test_cli_bad_settings_exit_cleanly(monkeypatch, data_file, capsys) -> None:
    monkeypatch.setenv("UPCOMING_WINDOW_DAYS", "soon")

    assert _run(data_file, "list") == 1
    assert "Error loading settings" in capsys.readouterr().err


def test_cli_parser_supports_subcommands() -> None:
    from src.__main__ import create_parser

    parser = create_parser()

    assert parser.parse_args(["stats"]).command == "stats"
    assert parser.parse_args([]).command is None
    update_args = parser.parse_args(["update", "3", "--status", "Offered"])
    assert update_args.id == "3"
    assert update_args.notes == ""


class TestMenu:
    """Test the interactive menu."""

    def _store(self, data_file) -> ApplicationStore:
        return ApplicationStore(JsonApplicationRepository(data_file))

    def test_menu_add_and_exit(self, data_file, capsys) -> None:
        """Option 1 should prompt for every field and add the application."""
        from src.__main__ import run_menu

        store = self._store(data_file)
        read = _scripted(
            [
                "1",
                "Acme Corp",
                "Backend Engineer",
                "REF-1",
                "2024-12-20",
                "not a date",
                "Online",
                "Applied",
                "Jane",
                "jane@acme.example",
                "notes",
                "7",
            ]
        )

        assert run_menu(store, read) == 0

        out = capsys.readouterr().out
        assert "Application added successfully! (ID 1)" in out
        assert "Good luck with your job search!" in out
        [app] = store.list_all()
        assert app.reference_number == "REF-1"
        assert app.application_date == date(2024, 12, 20)
        assert app.closing_date is None

    def test_menu_update_prompts_only_for_existing_id(self, data_file, capsys) -> None:
        """Option 4 should ask for new values only for an existing id."""
        from src.__main__ import run_menu

        store = self._store(data_file)
        store.add(company="Acme", position="Dev", status="Applied")
        read = _scripted(
            ["4", "9", "4", "x", "4", "1", "Interview", "called back", "7"]
        )

        run_menu(store, read)

        out = capsys.readouterr().out
        assert "Application not found!" in out
        assert "Invalid ID!" in out
        assert "Application updated successfully!" in out
        assert read.prompts.count("Update Notes: ") == 1
        assert store.get(1).status == "Interview"
        assert store.get(1).notes == "called back"

    def test_menu_views(self, data_file, capsys) -> None:
        """Options 2, 3, 5 and 6 should print their views."""
        from src.__main__ import run_menu

        store = self._store(data_file)
        store.add(company="Acme Corp", position="Dev", status="Interview")
        read = _scripted(["2", "3", "INTERVIEW", "5", "acme", "6", "9"])

        assert run_menu(store, read) == 0

        out = capsys.readouterr().out
        assert "=== ALL JOB APPLICATIONS ===" in out
        assert "=== APPLICATIONS WITH STATUS: INTERVIEW ===" in out
        assert "=== SEARCH RESULTS FOR: 'acme' ===" in out
        assert "Total Applications: 1" in out
        assert "Interview: 1" in out
        assert "Invalid choice. Please try again." in out

    def test_menu_exits_on_end_of_input_mid_prompt(self, data_file) -> None:
        """End of input during a prompt should exit without adding."""
        from src.__main__ import run_menu

        store = self._store(data_file)

        assert run_menu(store, _scripted(["1", "Acme"])) == 0
        assert store.list_all() == []

    def test_menu_reports_oversized_id_as_invalid(self, data_file, capsys) -> None:
        """An id too long to convert should be reported, not crash the menu."""
        from src.__main__ import run_menu

        store = self._store(data_file)
        store.add(company="Acme", position="Dev", status="Applied")

        assert run_menu(store, _scripted(["4", "9" * 5000, "7"])) == 0

        out = capsys.readouterr().out
        assert "Invalid ID!" in out
        assert "Good luck with your job search!" in out
        assert store.get(1).status == "Applied"
