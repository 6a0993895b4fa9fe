"""Interactive command loop of the movie library client."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from movieclient import admin, library
from movieclient.connection import ClientConnectionError
from movieclient.session import Console, Session

Command = Callable[[Session, Console], None]

UNKNOWN_COMMAND = "ERROR: Comandă necunoscută"


def dispatcher() -> dict[str, Command]:
    """Map of command names to the functions that carry them out."""
    return {
        "login_admin": admin.login_admin,
        "add_user": admin.add_user,
        "get_users": admin.get_users,
        "delete_user": admin.delete_user,
        "logout_admin": admin.logout_admin,
        "login": admin.login,
        "get_access": admin.get_access,
        "logout": admin.logout,
        "add_movie": library.add_movie,
        "get_movies": library.get_movies,
        "get_movie": library.get_movie,
        "delete_movie": library.delete_movie,
        "update_movie": library.update_movie,
        "add_collection": library.add_collection,
        "get_collections": library.get_collections,
        "get_collection": library.get_collection,
        "delete_collection": library.delete_collection,
        "add_movie_to_collection": library.add_movie_to_collection,
        "delete_movie_from_collection": library.delete_movie_from_collection,
    }


def run(session: Session, console: Console) -> None:
    """Read commands line by line until 'exit' or end of input."""
    commands = dispatcher()
    while (line := console.readline()) is not None:
        words = line.split()
        name = words[0] if words else ""
        if name == "exit":
            break
        command = commands.get(name)
        if command is None:
            console.say(UNKNOWN_COMMAND)
            continue
        command(session, console)
        if name == "delete_user":
            session.user_cookies.clear()
            session.token = None


def main(argv: Sequence[str] | None = None) -> int:
    """Run the client on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="movieclient", description="Interactive client for the movie library server."
    )
    parser.parse_args(argv)
    try:
        run(Session(), Console())
    except ClientConnectionError as exc:
        cause = f": {exc.__cause__}" if exc.__cause__ else ""
        print(f"{exc}{cause}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())