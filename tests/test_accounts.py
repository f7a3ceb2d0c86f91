import pytest

from tlschat.accounts import authenticate_user, parse_account_line


@pytest.fixture
def accounts_file(tmp_path):
    path = tmp_path / "accounts.txt"
    path.write_text("alice:password\nbob:secret\nbroken line\n:orphan\n", encoding="utf-8")
    return str(path)


def test_parse_simple_line():
    assert parse_account_line("alice:password\n") == ("alice", "password")


def test_parse_takes_first_word_after_colon():
    assert parse_account_line("bob:  secret trailing\n") == ("bob", "secret")


def test_parse_keeps_colons_in_password():
    assert parse_account_line("carol:a:b\n") == ("carol", "a:b")


@pytest.mark.parametrize("line", ["no separator\n", ":password\n", "dave:\n", "dave:   \n", ""])
def test_parse_rejects_incomplete_lines(line):
    assert parse_account_line(line) is None


def test_authenticate_known_user(accounts_file):
    assert authenticate_user("alice", "password", accounts_file) is True
    assert authenticate_user("bob", "secret", accounts_file) is True


def test_authenticate_wrong_password(accounts_file):
    assert authenticate_user("alice", "secret", accounts_file) is False


def test_authenticate_unknown_user(accounts_file):
    assert authenticate_user("mallory", "password", accounts_file) is False


def test_authenticate_ignores_malformed_lines(accounts_file):
    assert authenticate_user("", "orphan", accounts_file) is False


def test_authenticate_missing_file(tmp_path, capsys):
    assert authenticate_user("alice", "password", str(tmp_path / "absent.txt")) is False
    assert "Failed to open accounts file" in capsys.readouterr().err