# tlschat

A small chat system over TLS. A server accepts many clients and checks each
login against an accounts file. It relays every message to the other users and
keeps a chat history on disk. A terminal client logs in and then sends each
line you type.

It uses only the Python standard library and runs on POSIX systems. Waiting
for keyboard input uses `select` on standard input.

## Installing

```
pip install .
```

## Running the server

```
tlschat-server [--host HOST] [--port PORT] [--cert CERT] [--key KEY]
               [--accounts FILE] [--history FILE] [--max-clients N]
```

| Option          | Default            | Meaning                                   |
|-----------------|--------------------|-------------------------------------------|
| `--host`        | all addresses      | address to bind                           |
| `--port`        | `12345`            | port to listen on                         |
| `--cert`        | `cert.pem`         | PEM certificate                           |
| `--key`         | `key.pem`          | PEM private key                           |
| `--accounts`    | `accounts.txt`     | accounts file                             |
| `--history`     | `chat_history.txt` | chat history file                         |
| `--max-clients` | `100`              | connections accepted at once              |

If the certificate or key cannot be loaded, the server prints an error and
exits with status 1. When the limit of clients is reached, it closes further
connections straight after the TLS handshake.

Accounts are kept one per line as `username:password`:

```
alice:password
bob:secret
```

The user name is everything before the first colon. The password is the first
word after it. Lines without both parts are ignored.

### The exchange

1. A client first sends `username:password` in a single message.
2. Without a colon, the server answers `Invalid format` and closes the
   connection. For an unknown user or a wrong password, it answers
   `Authentication failed` and closes the connection.
3. On success the server answers `AUTH_SUCCESS`. It tells the other users
   `*** User 'name' has joined the chat ***` and then sends the newcomer the
   last 100 lines of the history file.
4. The server passes each message on to the others as `[name]: text`.
5. When a user disconnects, the others see
   `*** User 'name' has left the chat ***`.

Announcements and messages are all appended to the history file. Names are cut
to 31 characters.

## Running the client

```
tlschat-client [--host HOST] [--port PORT] [--timeout SECONDS]
```

By default the client connects to `127.0.0.1:12345`. It asks for a username
and a password, each cut to 31 characters, and logs in. Once logged in, every
line you type is sent to the chat, and messages from others are printed as
they arrive.

The client exits in these cases:

- nothing is typed for `--timeout` seconds (default 50);
- standard input ends;
- the server closes the connection, in which case it prints
  `Disconnected from server.` and exits with status 1.

## Idle echo

```
tlschat-idle
```

This command echoes each line you type back as `You typed: ...`. Lines longer
than 99 characters come back in pieces. It stops at end of input or after 10
seconds without input.

## Using it as a library

- `tlschat.accounts`
  - `parse_account_line(line)` splits an accounts line into `(user, password)`,
    or returns `None`.
  - `authenticate_user(username, password, path)` checks a login against an
    accounts file. It returns `False` if the file cannot be read.
- `tlschat.history.ChatHistory(path, limit)`
  - `append(message)` adds text to the history file.
  - `recent()` returns the last `limit` lines, oldest first.
  - `limit` must be at least 1.
- `tlschat.server`
  - `ChatServer(host, port, accounts_path, history_path, max_clients)` is the
    server. It has the methods `register`, `unregister`, `broadcast`,
    `handle_client` and `serve_forever(context)`. Its `clients` property lists
    the current connections.
  - `create_server_context(certfile, keyfile)` builds the server's TLS context.
  - `parse_credentials`, `format_chat_line`, `join_message` and
    `leave_message` build and read the wire texts described above.
- `tlschat.client`
  - `login(conn, username, password)` performs the login exchange. It raises
    `LoginError` when the server refuses and `ConnectionError` when the server
    closes the connection.
  - `read_line_with_timeout(stream, timeout)` reads one line and raises
    `TimeoutError` if none arrives in time.
  - `create_client_context()` builds the client's TLS context.
- `tlschat.idle.echo_until_idle(stream, out, timeout)` runs the echo loop.

## What it does not do

- The client does not verify the server's certificate or host name.
- Passwords are stored in the accounts file as plain text. No command adds or
  changes accounts; edit the file by hand.
- No command creates the certificate or key; supply your own PEM files.
- The history file grows without limit; only the replay to new users is capped.

## Tests

```
pip install .[test]
pytest
```