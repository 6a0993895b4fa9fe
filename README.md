# movieclient

An interactive command-line client for a movie library web service. It talks
HTTP/1.1 directly over a TCP socket, opening a fresh connection for every
request, keeps the session cookies handed out at login, and sends the library
access token as a `Bearer` authorization header. Request bodies are sent as
compact JSON.

## Installation

```
pip install .
```

The package has no runtime dependencies beyond the Python standard library
(Python 3.10 or later).

## Usage

Start the client:

```
movieclient
```

The command takes no options beyond `--help`. It reads one command per line
from standard input; only the first word of a line counts. Commands that need
more information prompt for it field by field (for example `username=`,
`password=`, `id=`). Outcomes are reported on lines starting with `SUCCESS:`
or `ERROR:`. Type `exit`, or close standard input, to quit.

If the server cannot be reached, or a write or read on the connection fails,
the client prints the error on standard error and stops.

### Administrator commands

| Command        | What it does                                                 |
|----------------|--------------------------------------------------------------|
| `login_admin`  | Log in as administrator and keep the session cookies         |
| `add_user`     | Create a regular user account                                |
| `get_users`    | List the users, numbered, as `username:password`             |
| `delete_user`  | Delete a user; afterwards the user cookies and token are dropped |
| `logout_admin` | End the administrator session                                |

### User commands

| Command      | What it does                                        |
|--------------|-----------------------------------------------------|
| `login`      | Log in as a user created by the given administrator |
| `get_access` | Obtain the token that unlocks the library           |
| `logout`     | End the user session (without a login, only the token is dropped) |

### Library commands

| Command                        | What it does                                   |
|--------------------------------|------------------------------------------------|
| `add_movie`                    | Add a movie (title, year, description, rating) |
| `get_movies`                   | List all movies by id and title                |
| `get_movie`                    | Print the movie's JSON as the server sends it  |
| `update_movie`                 | Replace the details of a movie                 |
| `delete_movie`                 | Delete a movie                                 |
| `add_collection`               | Create a collection and add the given movies to it |
| `get_collections`              | List all collections                           |
| `get_collection`               | Show a collection's title, owner and movies    |
| `delete_collection`            | Delete a collection                            |
| `add_movie_to_collection`      | Add a movie to a collection                    |
| `delete_movie_from_collection` | Remove a movie from a collection               |

Any other command is answered with `ERROR: Comandă necunoscută` and the client
keeps running.

### Example session

```
$ movieclient
login_admin
username=admin
password=password
SUCCESS: Admin autentificat cu succes
add_user
username=alice
password=password
SUCCESS: User adaugat cu succes
login
admin_username=admin
username=alice
password=password
SUCCESS: User autentificat cu succes
get_access
SUCCESS: Token JWT primit
get_movies
SUCCESS: Lista filmelor
exit
```

## Using it as a library

The building blocks are importable on their own:

- `movieclient.messages` builds raw request text:
  `compute_get_request`, `compute_post_request`, `compute_put_request`,
  `compute_delete_request`.
- `movieclient.connection` sends a request and reads the response:
  `do_request` returns an `HTTPResponse` (`code` and `raw`); `open_connection`,
  `send_to_server` and `receive_from_server` are the socket steps, and
  `status_code`, `extract_cookies`, `basic_extract_json_response` and
  `find_insensitive` pick responses apart. Connection, write and read
  failures raise `ClientConnectionError`.
- `movieclient.session.Session` holds the server address (`host`, `port`),
  the admin and user cookies and the token; its `transport` field is the
  function that sends requests (`do_request` by default) and can be replaced.
  `movieclient.session.Console` prompts (`ask`), reads lines (`readline`) and
  writes messages (`say`) over any pair of text streams.
- `movieclient.admin` and `movieclient.library` hold one function per command,
  each taking a `Session` and a `Console`.
- `movieclient.cli.run(session, console)` drives the command loop, and
  `movieclient.cli.dispatcher()` maps command names to their handlers.

```python
import io
from movieclient.cli import run
from movieclient.session import Console, Session

out = io.StringIO()
run(Session(host="127.0.0.1", port=8080), Console(io.StringIO("get_movies\nexit\n"), out))
print(out.getvalue())
```

## Limitations

- The `movieclient` command always uses the default address built into
  `Session`; it cannot be pointed at another server from the command line.
  Use `Session(host=..., port=...)` with `run` for that.
- Plain HTTP only: no TLS, no redirects, no chunked transfer encoding. A
  response is read up to its `Content-Length`, or until the server closes the
  connection when that header is missing.
- There is no server in this package; it only talks to an existing one.

## Running the tests

```
pip install .[test]
pytest
```