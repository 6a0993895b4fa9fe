"""Admin account commands and user authentication commands."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from movieclient.connection import extract_cookies
from movieclient.session import Console, Session, is_success

ADMIN_BASE = "/api/v1/tema/admin"
USER_BASE = "/api/v1/tema/user"
ACCESS_URL = "/api/v1/tema/library/access"
JSON_TYPE = "application/json"
HEADER_END = "\r\n\r\n"

INVALID_CREDENTIALS = "ERROR: Credentiale invalide"
NO_ADMIN_RIGHTS = {403: "ERROR: Lipsa permisiuni admin"}


def _body_of(raw: str) -> str | None:
    pos = raw.find(HEADER_END)
    return None if pos < 0 else raw[pos + len(HEADER_END):]


def _ask_fields(console: Console, *names: str) -> dict[str, str]:
    return {name: console.ask(f"{name}=") for name in names}


def _failed(console: Console, code: int, failures: Mapping[int, str], fallback: str) -> bool:
    """Report a failed status and return True; return False on success."""
    if is_success(code):
        return False
    console.say(failures.get(code, fallback))
    return True


def _login(
    session: Session,
    console: Console,
    url: str,
    cookies: list[str],
    fields: tuple[str, ...],
    already: str,
    success: str,
) -> None:
    values = _ask_fields(console, *fields)
    if not all(values.values()):
        console.say(INVALID_CREDENTIALS)
        return
    if cookies:
        console.say(already)
        return

    response = session.request("POST", url, cookies, JSON_TYPE, values)
    if _failed(console, response.code, {401: INVALID_CREDENTIALS}, "ERROR: Autentificare esuata"):
        return
    console.say(success)
    cookies.extend(extract_cookies(response.raw))


def _end_session(
    session: Session, console: Console, url: str, cookies: list[str], success: str
) -> None:
    response = session.request("GET", url, cookies)
    if _failed(console, response.code, {}, "ERROR: Logout esuat"):
        return
    console.say(success)
    cookies.clear()


def login_admin(session: Session, console: Console) -> None:
    """Log in as admin and keep the session cookies the server sets."""
    _login(
        session,
        console,
        f"{ADMIN_BASE}/login",
        session.admin_cookies,
        ("username", "password"),
        "ERROR: Admin deja autentificat",
        "SUCCESS: Admin autentificat cu succes",
    )


def add_user(session: Session, console: Console) -> None:
    """Create a user account as admin."""
    values = _ask_fields(console, "username", "password")
    if not all(values.values()):
        console.say(INVALID_CREDENTIALS)
        return

    response = session.request(
        "POST", f"{ADMIN_BASE}/users", session.admin_cookies, JSON_TYPE, values, session.token
    )
    if not _failed(console, response.code, NO_ADMIN_RIGHTS, "ERROR: Adaugare user esuata"):
        console.say("SUCCESS: User adaugat cu succes")


def show_users(console: Console, data: Any) -> None:
    """Print the numbered users of a users listing."""
    console.say("SUCCESS: Lista utilizatorilor")
    for index, user in enumerate(data["users"], start=1):
        console.say(f"#{index} {user['username']}:{user['password']}")


def get_users(session: Session, console: Console) -> None:
    """List every user, as admin."""
    response = session.request(
        "GET", f"{ADMIN_BASE}/users", session.admin_cookies, token=session.token
    )
    if _failed(console, response.code, NO_ADMIN_RIGHTS, "ERROR: Eroare la obtinerea userilor"):
        return
    body = _body_of(response.raw)
    if body is None:
        console.say("SUCCESS: Lista utilizatorilor")
    else:
        show_users(console, json.loads(body))


def delete_user(session: Session, console: Console) -> None:
    """Delete a user account by name, as admin."""
    username = console.ask("username=")
    if not username:
        console.say("ERROR: Invalid username")
        return

    response = session.request(
        "DELETE", f"{ADMIN_BASE}/users/{username}", session.admin_cookies, token=session.token
    )
    failures = {**NO_ADMIN_RIGHTS, 404: "ERROR: Username invalid"}
    if not _failed(console, response.code, failures, "ERROR: Stergere user esuata"):
        console.say("SUCCESS: Utilizator sters")


def logout_admin(session: Session, console: Console) -> None:
    """Log the admin out and forget the admin cookies."""
    if not session.admin_cookies:
        console.say("ERROR: Admin nu este autentificat")
        return
    _end_session(
        session, console, f"{ADMIN_BASE}/logout", session.admin_cookies, "SUCCESS: Admin delogat"
    )


def login(session: Session, console: Console) -> None:
    """Log in as a user belonging to an admin and keep the cookies set."""
    _login(
        session,
        console,
        f"{USER_BASE}/login",
        session.user_cookies,
        ("admin_username", "username", "password"),
        "ERROR: User deja autentificat",
        "SUCCESS: User autentificat cu succes",
    )


def get_access(session: Session, console: Console) -> None:
    """Obtain the library access token for the logged-in user."""
    if not session.user_cookies:
        console.say("ERROR: User nu este autentificat")
        return

    response = session.request("GET", ACCESS_URL, session.user_cookies)
    if _failed(console, response.code, {}, "ERROR: Acces esuat"):
        return

    body = _body_of(response.raw)
    if body is None:
        console.say("ERROR: Raspuns invalid")
        return

    try:
        parsed = json.loads(body)
    except ValueError:
        console.say("ERROR: Raspuns invalid ")
        return

    token = parsed.get("token") if isinstance(parsed, dict) else None
    if isinstance(token, str):
        session.token = token
        console.say("SUCCESS: Token JWT primit")
    else:
        console.say("ERROR: Token lipsa in raspuns")


def logout(session: Session, console: Console) -> None:
    """Log the user out; without a login only the access token is dropped."""
    if not session.user_cookies:
        console.say("SUCCESS: Utilizator delogat")
        session.token = None
        return
    _end_session(
        session, console, f"{USER_BASE}/logout", session.user_cookies, "SUCCESS: Utilizator delogat"
    )