import os
import socket
import ssl

import pytest

from tlschat.client import LoginError, create_client_context, login, read_line_with_timeout


@pytest.fixture
def conns():
    client, server = socket.socketpair()
    client.settimeout(5)
    server.settimeout(5)
    yield client, server
    client.close()
    server.close()


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    reader = open(read_fd, "rb", buffering=0)
    writer = open(write_fd, "wb", buffering=0)
    yield reader, writer
    reader.close()
    if not writer.closed:
        writer.close()


def test_login_sends_credentials_and_accepts_success(conns):
    client, server = conns
    server.sendall(b"AUTH_SUCCESS")
    result = login(client, "alice", "password")
    assert result is None
    assert server.recv(1024) == b"alice:password"


def test_login_rejected(conns):
    client, server = conns
    server.sendall(b"Authentication failed")
    with pytest.raises(LoginError) as info:
        login(client, "alice", "password")
    assert info.value.response == "Authentication failed"


def test_login_server_closed(conns):
    client, server = conns
    server.shutdown(socket.SHUT_WR)
    with pytest.raises(ConnectionError):
        login(client, "alice", "password")


def test_read_line(pipe):
    reader, writer = pipe
    writer.write(b"hello\nworld\n")
    assert read_line_with_timeout(reader, 1) == "hello\n"
    assert read_line_with_timeout(reader, 1) == "world\n"


def test_read_line_times_out(pipe):
    reader, _writer = pipe
    with pytest.raises(TimeoutError):
        read_line_with_timeout(reader, 0.05)


def test_read_line_end_of_input(pipe):
    reader, writer = pipe
    writer.close()
    assert read_line_with_timeout(reader, 1) == ""


def test_client_context_skips_verification():
    context = create_client_context()
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False