"""Interactive TLS chat client."""

from __future__ import annotations

import argparse
import os
import select
import socket
import ssl
import sys
import threading
from typing import Any, TextIO

PORT = 12345
HOST = "127.0.0.1"
BUFFER_SIZE = 1024
USERNAME_LEN = 32
TIME_OUT = 50

AUTH_SUCCESS = "AUTH_SUCCESS"


class LoginError(Exception):
    """The server refused the credentials."""

    def __init__(self, response: str) -> None:
        super().__init__(f"Login failed: {response}")
        self.response = response


def login(conn: Any, username: str, password: str) -> None:
    """Send credentials over *conn* and wait for the server's verdict.

    Raises ConnectionError if the server closes the connection and
    LoginError if it answers with anything but a success.
    """
    conn.sendall(f"{username}:{password}".encode("utf-8"))
    data = conn.recv(BUFFER_SIZE - 1)
    if not data:
        raise ConnectionError("Server closed connection.")
    response = data.decode("utf-8", errors="replace")
    if response != AUTH_SUCCESS:
        raise LoginError(response)


def read_line_with_timeout(stream: Any, timeout: float) -> str:
    """Read one line from *stream*, waiting at most *timeout* seconds for it.

    The stream should be unbuffered so that waiting on its descriptor sees
    all pending input. Returns an empty string at end of input and raises
    TimeoutError if nothing arrives in time.
    """
    ready, _, _ = select.select([stream], [], [], timeout)
    if not ready:
        raise TimeoutError(f"no input in {timeout:g} seconds")
    line = stream.readline()
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def create_client_context() -> ssl.SSLContext:
    """Build a TLS client context that accepts the server's certificate unchecked."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def _receive_messages(conn: Any, out: TextIO, stopping: threading.Event) -> None:
    while True:
        try:
            data = conn.recv(BUFFER_SIZE - 1)
        except OSError:
            break
        if not data:
            break
        out.write(f"\r{data.decode('utf-8', errors='replace')}\n> ")
        out.flush()
    if stopping.is_set():
        return
    out.write("\nDisconnected from server.\n")
    out.flush()
    os._exit(1)


def _prompt_for(field: str) -> str:
    try:
        value = input(f"Enter your {field}: ")
    except EOFError:
        value = ""
    return value[: USERNAME_LEN - 1]


def main(argv: list[str] | None = None) -> int:
    """Log in to the chat server and relay typed lines until idle or closed."""
    parser = argparse.ArgumentParser(description="TLS chat client")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--timeout", type=float, default=TIME_OUT)
    args = parser.parse_args(argv)

    username = _prompt_for("username")
    password = _prompt_for("password")

    context = create_client_context()
    try:
        raw = socket.create_connection((args.host, args.port))
    except OSError as exc:
        print(f"connect failed: {exc}", file=sys.stderr)
        return 1
    try:
        conn = context.wrap_socket(raw)
    except OSError as exc:
        print(f"TLS handshake failed: {exc}", file=sys.stderr)
        raw.close()
        return 1

    stopping = threading.Event()
    with conn:
        try:
            login(conn, username, password)
        except LoginError as exc:
            print(f"Login failed: {exc.response}")
            return 1
        except OSError:
            print("Server closed connection.")
            return 1

        print(f"Connected to chat server as '{username}'.")
        threading.Thread(
            target=_receive_messages, args=(conn, sys.stdout, stopping), daemon=True
        ).start()

        with open(sys.stdin.fileno(), "rb", buffering=0, closefd=False) as stdin:
            while True:
                print("> ", end="", flush=True)
                try:
                    line = read_line_with_timeout(stdin, args.timeout)
                except TimeoutError:
                    print(f"\n⏰ No input in {args.timeout:g} seconds. Exiting...")
                    break
                except OSError as exc:
                    print(f"select error: {exc}", file=sys.stderr)
                    break
                if not line:
                    break
                try:
                    conn.sendall(line.encode("utf-8"))
                except OSError:
                    break
        stopping.set()
    return 0


if __name__ == "__main__":
    sys.exit(main())