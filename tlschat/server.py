"""Multi-user TLS chat server."""

from __future__ import annotations

import argparse
import socket
import ssl
import sys
import threading
from typing import Any

from tlschat.accounts import DEFAULT_ACCOUNTS_PATH, authenticate_user
from tlschat.history import DEFAULT_HISTORY_PATH, HISTORY_LINES, ChatHistory

PORT = 12345
MAX_CLIENTS = 100
BUFFER_SIZE = 1024
USERNAME_LEN = 32
LISTEN_BACKLOG = 10

AUTH_SUCCESS = "AUTH_SUCCESS"
INVALID_FORMAT = "Invalid format"
AUTH_FAILED = "Authentication failed"
CREDENTIAL_SEPARATOR = ":"


def parse_credentials(data: str) -> tuple[str, str]:
    """Split ``username:password`` at the first colon; raise ValueError without one."""
    username, sep, password = data.partition(CREDENTIAL_SEPARATOR)
    if not sep:
        raise ValueError(INVALID_FORMAT)
    return username, password


def format_chat_line(username: str, text: str) -> str:
    """Return a chat message as relayed to the other users."""
    return f"[{username}]: {text}"


def join_message(username: str) -> str:
    """Return the announcement of a user joining."""
    return f"*** User '{username}' has joined the chat ***\n"


def leave_message(username: str) -> str:
    """Return the announcement of a user leaving."""
    return f"*** User '{username}' has left the chat ***\n"


def create_server_context(certfile: str = "cert.pem", keyfile: str = "key.pem") -> ssl.SSLContext:
    """Build a TLS server context from a PEM certificate and private key."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(certfile, keyfile)
    return context


def _send(conn: Any, text: str) -> None:
    try:
        conn.sendall(text.encode("utf-8"))
    except OSError:
        pass


def _recv(conn: Any) -> str:
    try:
        data = conn.recv(BUFFER_SIZE - 1)
    except OSError:
        return ""
    return data.decode("utf-8", errors="replace")


def _close(conn: Any) -> None:
    try:
        conn.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass
    conn.close()


class ChatServer:
    """Relays messages between authenticated clients and keeps a chat log."""

    def __init__(
        self,
        host: str = "",
        port: int = PORT,
        accounts_path: str = DEFAULT_ACCOUNTS_PATH,
        history_path: str = DEFAULT_HISTORY_PATH,
        max_clients: int = MAX_CLIENTS,
    ) -> None:
        self.host = host
        self.port = port
        self.accounts_path = accounts_path
        self.history = ChatHistory(history_path, HISTORY_LINES)
        self.max_clients = max_clients
        self._clients: list[Any] = []
        self._lock = threading.Lock()

    @property
    def clients(self) -> tuple[Any, ...]:
        """The connections currently registered."""
        with self._lock:
            return tuple(self._clients)

    def register(self, conn: Any) -> bool:
        """Add *conn* to the client list; return False if the server is full."""
        with self._lock:
            if len(self._clients) >= self.max_clients:
                return False
            self._clients.append(conn)
            return True

    def unregister(self, conn: Any) -> None:
        """Remove *conn* from the client list and close it."""
        with self._lock:
            if conn not in self._clients:
                return
            self._clients.remove(conn)
            _close(conn)

    def broadcast(self, message: str, sender: Any) -> None:
        """Send *message* to every registered client except *sender*."""
        with self._lock:
            for conn in self._clients:
                if conn is not sender:
                    _send(conn, message)

    def _announce(self, message: str, sender: Any) -> None:
        self.broadcast(message, sender)
        self.history.append(message)

    def handle_client(self, conn: Any) -> None:
        """Authenticate a registered connection and relay its messages until it closes."""
        try:
            self._session(conn)
        finally:
            self.unregister(conn)

    def _session(self, conn: Any) -> None:
        data = _recv(conn)
        if not data:
            return
        try:
            username, password = parse_credentials(data)
        except ValueError:
            _send(conn, INVALID_FORMAT)
            return
        if not authenticate_user(username, password, self.accounts_path):
            _send(conn, AUTH_FAILED)
            return

        _send(conn, AUTH_SUCCESS)
        username = username[: USERNAME_LEN - 1]
        print(f"User '{username}' connected.", flush=True)
        self._announce(join_message(username), conn)

        for line in self.history.recent():
            _send(conn, line)

        while data := _recv(conn):
            message = format_chat_line(username, data)
            print(message, end="", flush=True)
            self._announce(message, conn)

        print(f"User '{username}' disconnected.", flush=True)
        self._announce(leave_message(username), conn)

    def serve_forever(self, context: ssl.SSLContext) -> None:
        """Accept TLS connections and serve each one on its own thread."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((self.host, self.port))
            listener.listen(LISTEN_BACKLOG)
            print(f"TLS chat server listening on port {self.port}...", flush=True)

            while True:
                try:
                    raw, address = listener.accept()
                except OSError as exc:
                    print(f"accept failed: {exc}", file=sys.stderr)
                    continue

                try:
                    conn = context.wrap_socket(raw, server_side=True)
                except OSError as exc:
                    print(f"TLS handshake failed: {exc}", file=sys.stderr)
                    raw.close()
                    continue

                if not self.register(conn):
                    print("Max clients reached.", flush=True)
                    _close(conn)
                    continue

                threading.Thread(target=self.handle_client, args=(conn,), daemon=True).start()
                print(f"Accepted TLS connection from {address[0]}:{address[1]}", flush=True)


def main(argv: list[str] | None = None) -> int:
    """Run the chat server from the command line."""
    parser = argparse.ArgumentParser(description="TLS chat server")
    parser.add_argument("--host", default="", help="address to bind (default: all)")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--cert", default="cert.pem")
    parser.add_argument("--key", default="key.pem")
    parser.add_argument("--accounts", default=DEFAULT_ACCOUNTS_PATH)
    parser.add_argument("--history", default=DEFAULT_HISTORY_PATH)
    parser.add_argument("--max-clients", type=int, default=MAX_CLIENTS)
    args = parser.parse_args(argv)

    try:
        context = create_server_context(args.cert, args.key)
    except (OSError, ssl.SSLError) as exc:
        print(f"Failed to load certificate: {exc}", file=sys.stderr)
        return 1

    server = ChatServer(args.host, args.port, args.accounts, args.history, args.max_clients)
    try:
        server.serve_forever(context)
    except OSError as exc:
        print(f"server failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())