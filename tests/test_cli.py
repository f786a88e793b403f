import json

import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock

from main import app
from library import Library
from utils.ui_helpers import OUTPUT_MODE_ENV

runner = CliRunner()

ADMIN = ["-u", "admin", "-p", "admin123"]
ALICE = ["-u", "alice", "-p", "wonderland"]


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def stocked(lib, alice):
    lib.add_book("B1", "Dune", "Herbert", "SciFi", 1965)
    lib.add_book("B2", "Emma", "Austen", "Romance", 1815)
    return lib


def test_list_no_books(lib):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No books in library." in result.stdout


def test_list_and_search(stocked):
    result = runner.invoke(app, ["list"])
    assert "B1 - Dune by Herbert [Available] ★0.0" in result.stdout
    assert "B2 - Emma by Austen" in result.stdout

    result = runner.invoke(app, ["search", "dune"])
    assert result.exit_code == 0
    assert "B1 - Dune" in result.stdout
    assert "Emma" not in result.stdout

    result = runner.invoke(app, ["search", "tolkien"])
    assert "No books match 'tolkien'." in result.stdout


def test_list_json_output(stocked):
    result = runner.invoke(app, ["--output", "json", "list"])
    payload = json.loads(result.stdout)
    assert [b["id"] for b in payload] == ["B1", "B2"]


def test_details(stocked):
    result = runner.invoke(app, ["details", "B1"])
    assert "Title: Dune" in result.stdout
    assert "Status: Available" in result.stdout
    assert "Rating: 0.0 (0 ratings)" in result.stdout

    result = runner.invoke(app, ["details", "nope"])
    assert "Book not found!" in result.stdout


def test_register_and_duplicate(lib):
    args = ["register", "bob", "-p", "pw", "-n", "Bob", "-e", "bob@example.com"]
    result = runner.invoke(app, args)
    assert result.exit_code == 0
    assert "Registration successful!" in result.stdout
    assert Library().login("bob", "pw") is not None

    result = runner.invoke(app, args)
    assert "Username already exists!" in result.stdout


def test_register_prompts_for_password(lib):
    result = runner.invoke(app, ["register", "carol"], input="secret\nsecret\n")
    assert result.exit_code == 0
    assert Library().login("carol", "secret") is not None


def test_invalid_login_exits_nonzero(stocked):
    result = runner.invoke(app, ["borrow", "B1", "-u", "alice", "-p", "wrong"])
    assert result.exit_code == 1
    assert "Invalid login!" in result.stdout
    assert Library().find_book("B1").is_available is True


def test_borrow_return_flow(stocked):
    result = runner.invoke(app, ["borrow", "B1", *ALICE])
    assert result.exit_code == 0
    assert "Book borrowed! Due: " in result.stdout

    result = runner.invoke(app, ["my-books", *ALICE])
    assert "B1 - Dune by Herbert [Borrowed]" in result.stdout

    result = runner.invoke(app, ["borrow", "B1", *ADMIN])
    assert "Book already borrowed!" in result.stdout

    result = runner.invoke(app, ["return", "B1", *ADMIN])
    assert "You did not borrow this book!" in result.stdout

    result = runner.invoke(app, ["return", "B1", *ALICE])
    assert "Book returned successfully!" in result.stdout
    assert Library().find_user("alice").borrowed_books == []


def test_rate(stocked):
    result = runner.invoke(app, ["rate", "B1", "4", *ALICE])
    assert "Thank you for your rating!" in result.stdout
    assert "Your Rating: ★★★★" in result.stdout
    assert Library().find_book("B1").average_rating == 4

    result = runner.invoke(app, ["rate", "B1", "7", *ALICE])
    assert "Rating must be between 1 and 5!" in result.stdout

    result = runner.invoke(app, ["rate", "nope", "3", *ALICE])
    assert "Book not found!" in result.stdout


def test_add_book_as_admin(lib):
    result = runner.invoke(app, ["add", "B1", "Dune", "Herbert", "SciFi", "1965", *ADMIN])
    assert result.exit_code == 0
    assert "Book added!" in result.stdout

    result = runner.invoke(app, ["add", "B1", "Dune", "Herbert", "SciFi", "1965", *ADMIN])
    assert "Book ID already exists!" in result.stdout

    result = runner.invoke(app, ["add", "B2", "Emma", "Austen", "Romance", "eighteen", *ADMIN])
    assert "Invalid year!" in result.stdout
    assert Library().find_book("B2") is None


def test_admin_commands_refused_for_regular_user(stocked):
    result = runner.invoke(app, ["add", "B9", "T", "A", "G", "2000", *ALICE])
    assert result.exit_code == 1
    assert "Admin privileges required!" in result.stdout

    result = runner.invoke(app, ["users", *ALICE])
    assert result.exit_code == 1


def test_remove_book(stocked):
    result = runner.invoke(app, ["remove", "B1", "--yes", *ADMIN])
    assert "Book removed successfully!" in result.stdout

    result = runner.invoke(app, ["remove", "B1", "--yes", *ADMIN])
    assert "Failed to remove book!" in result.stdout

    result = runner.invoke(app, ["remove", "B2", *ADMIN], input="n\n")
    assert "Removal cancelled." in result.stdout
    assert Library().find_book("B2") is not None


def test_user_management(stocked):
    result = runner.invoke(app, ["users", *ADMIN])
    assert "admin (Admin) - Active - 0 borrowed" in result.stdout
    assert "alice (User) - Active - 0 borrowed" in result.stdout

    result = runner.invoke(app, ["toggle-user", "alice", *ADMIN])
    assert "alice is now Inactive." in result.stdout
    assert "Invalid login!" in runner.invoke(app, ["my-books", *ALICE]).stdout

    result = runner.invoke(app, ["reset-password", "alice", "--new-password", "fresh", *ADMIN])
    assert "Password updated!" in result.stdout
    assert Library().find_user("alice").password == "fresh"

    result = runner.invoke(app, ["toggle-user", "ghost", *ADMIN])
    assert "User not found!" in result.stdout


def test_passwd_and_update_info(stocked):
    result = runner.invoke(app, ["passwd", *ALICE, "--new-password", "mirror"], input="mirror\n")
    assert "Password changed!" in result.stdout

    result = runner.invoke(app, ["update-info", "-u", "alice", "-p", "mirror", "-e", "al@example.com"])
    assert "Information updated!" in result.stdout
    user = Library().find_user("alice")
    assert (user.full_name, user.email) == ("Alice Liddell", "al@example.com")


def test_stats(stocked):
    result = runner.invoke(app, ["stats"])
    assert "Total Books: 2" in result.stdout
    assert "Total Users: 2" in result.stdout


def test_export(stocked, tmp_path):
    result = runner.invoke(app, ["export"])
    assert result.exit_code == 0
    assert "Data exported to text files!" in result.stdout


def test_save_failure_is_reported(stocked, monkeypatch):
    monkeypatch.setattr("library.database.save_library", MagicMock(return_value=False))
    result = runner.invoke(app, ["borrow", "B1", *ALICE])
    assert "Book borrowed!" in result.stdout
    assert "changes were not saved" in result.stdout
