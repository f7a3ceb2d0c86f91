"""Account file lookup used to authenticate chat users."""

from __future__ import annotations

import sys

DEFAULT_ACCOUNTS_PATH = "accounts.txt"


def parse_account_line(line: str) -> tuple[str, str] | None:
    """Split a ``user:password`` line into its two fields.

    The user name is everything before the first colon and must not be
    empty. The password is the first whitespace-delimited word after the
    colon. Returns ``None`` for a line that does not hold both fields.
    """
    user, sep, rest = line.partition(":")
    if not sep or not user:
        return None
    words = rest.split()
    if not words:
        return None
    return user, words[0]


def authenticate_user(
    username: str, password: str, path: str = DEFAULT_ACCOUNTS_PATH
) -> bool:
    """Return True if the accounts file at *path* holds this user and password."""
    try:
        with open(path, encoding="utf-8", errors="replace") as accounts:
            for line in accounts:
                entry = parse_account_line(line)
                if entry == (username, password):
                    return True
    except OSError as exc:
        print(f"Failed to open accounts file: {exc}", file=sys.stderr)
    return False