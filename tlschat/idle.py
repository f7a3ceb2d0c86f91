"""Echo typed lines until the user stops typing for a while."""

from __future__ import annotations

import select
import sys
from typing import Any, TextIO

BUF_SIZE = 100
TIMEOUT_SECONDS = 10


def echo_until_idle(stream: Any, out: TextIO, timeout: float = TIMEOUT_SECONDS) -> int:
    """Echo lines from *stream* to *out* until no input arrives for *timeout* seconds.

    Lines longer than the read buffer are echoed in pieces. Stops at end of
    input as well. Returns the number of pieces echoed.
    """
    out.write(f"Start typing. If you stop for {timeout:g} seconds, program will exit.\n")
    echoed = 0
    while True:
        ready, _, _ = select.select([stream], [], [], timeout)
        if not ready:
            out.write(f"\nTimeout! No input in {timeout:g} seconds. Exiting...\n")
            return echoed
        chunk = stream.readline(BUF_SIZE - 1)
        if not chunk:
            return echoed
        if isinstance(chunk, bytes):
            chunk = chunk.decode("utf-8", errors="replace")
        out.write(f"You typed: {chunk}")
        out.flush()
        echoed += 1


def main(argv: list[str] | None = None) -> int:
    """Run the idle-timeout echo loop on standard input."""
    del argv
    with open(sys.stdin.fileno(), "rb", buffering=0, closefd=False) as stdin:
        try:
            echo_until_idle(stdin, sys.stdout, TIMEOUT_SECONDS)
        except OSError as exc:
            print(f"select error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())