"""Movie and collection commands for the library of the logged-in user."""

from __future__ import annotations

import json
import math
import re
from typing import Any

from movieclient.connection import basic_extract_json_response
from movieclient.session import Console, Session, error_message_for, is_success

LIBRARY_BASE = "/api/v1/tema/library"
MOVIES_URL = f"{LIBRARY_BASE}/movies"
COLLECTIONS_URL = f"{LIBRARY_BASE}/collections"
JSON_TYPE = "application/json"
HEADER_END = "\r\n\r\n"

NO_ACCESS = "ERROR: Fara acces library"
INVALID_INPUT = "ERROR: Invalid input"
INVALID_ID = "ERROR: Invalid ID"
ID_NOT_FOUND = "ERROR: ID invalid"
INCOMPLETE_DATA = "ERROR: Date invalide/incomplete"
INVALID_RESPONSE = "ERROR: Raspuns invalid"

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _leading_int(text: str) -> int:
    """Integer at the start of text, after optional whitespace; rejects 32-bit overflow."""
    match = _INT_RE.match(text)
    if match is None:
        raise ValueError(f"no integer in {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _leading_float(text: str) -> float:
    """Floating-point number at the start of text, after optional whitespace."""
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError(f"no number in {text!r}")
    literal = match.group(1)
    value = float(literal)
    if math.isinf(value) and "inf" not in literal.lower():
        raise ValueError(f"number out of range: {text!r}")
    return value


def _is_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _body_of(raw: str) -> str | None:
    pos = raw.find(HEADER_END)
    return None if pos < 0 else raw[pos + len(HEADER_END):]


def _parse_json(text: str | None) -> Any:
    """Parsed JSON, or None when text is missing or not valid JSON."""
    if text is None:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def _read_movie(console: Console) -> dict[str, Any] | None:
    """Prompt for the fields of a movie; report and return None when they are invalid."""
    title = console.ask("title=")
    year_text = console.ask("year=")
    description = console.ask("description=")
    rating_text = console.ask("rating=")

    if not title or not year_text or not description or not rating_text:
        console.say(INVALID_INPUT)
        return None
    try:
        year = _leading_int(year_text)
        rating = _leading_float(rating_text)
    except ValueError:
        console.say(INVALID_INPUT)
        return None

    return {
        "title": title,
        "year": year,
        "description": description,
        "rating": rating if math.isfinite(rating) else None,
    }


def add_movie(session: Session, console: Console) -> None:
    """Add a movie to the library."""
    movie = _read_movie(console)
    if movie is None:
        return

    response = session.request(
        "POST", MOVIES_URL, session.user_cookies, JSON_TYPE, movie, session.token
    )
    if is_success(response.code):
        console.say("SUCCESS: Film adaugat")
    elif response.code == 403:
        console.say(NO_ACCESS)
    elif response.code == 400:
        console.say("ERROR: Date invalide")
    else:
        console.say("ERROR: Adaugare film esuata")


def show_movies(console: Console, movies: Any) -> None:
    """Print the id and title of every movie."""
    console.say("SUCCESS: Lista filmelor")
    for movie in movies:
        console.say(f"#{int(movie['id'])} {movie['title']}")


def get_movies(session: Session, console: Console) -> None:
    """List the movies of the library."""
    response = session.request("GET", MOVIES_URL, session.user_cookies, token=session.token)
    if not is_success(response.code):
        console.say(NO_ACCESS)
        return

    root = _parse_json(basic_extract_json_response(response.raw))
    if isinstance(root, list):
        show_movies(console, root)
    elif isinstance(root, dict) and isinstance(root.get("movies"), list):
        show_movies(console, root["movies"])
    else:
        console.say(NO_ACCESS)


def get_movie(session: Session, console: Console) -> None:
    """Print the details of one movie as returned by the server."""
    movie_id = console.ask("id=")
    response = session.request(
        "GET", f"{MOVIES_URL}/{movie_id}", session.user_cookies, token=session.token
    )
    if is_success(response.code):
        body = _body_of(response.raw)
        console.say("{}" if body is None else body)
    elif response.code == 404:
        console.say(ID_NOT_FOUND)
    else:
        console.say(NO_ACCESS)


def delete_movie(session: Session, console: Console) -> None:
    """Delete a movie by id."""
    movie_id = console.ask("id=")
    if not movie_id:
        console.say(INVALID_ID)
        return

    response = session.request(
        "DELETE", f"{MOVIES_URL}/{movie_id}", session.user_cookies, token=session.token
    )
    if is_success(response.code):
        console.say("SUCCESS: Film sters")
    elif response.code == 404:
        console.say(ID_NOT_FOUND)
    elif response.code == 403:
        console.say(NO_ACCESS)
    else:
        console.say("ERROR: Stergere film esuata")


def update_movie(session: Session, console: Console) -> None:
    """Replace the fields of a movie."""
    movie_id = console.ask("id=")
    movie = _read_movie(console)
    if movie is None:
        return

    response = session.request(
        "PUT",
        f"{MOVIES_URL}/{movie_id}",
        session.user_cookies,
        JSON_TYPE,
        movie,
        session.token,
    )
    if is_success(response.code):
        console.say("SUCCESS: Film actualizat")
    elif response.code == 403:
        console.say(NO_ACCESS)
    elif response.code == 404:
        console.say(ID_NOT_FOUND)
    elif response.code == 400:
        console.say("ERROR: Date invalide")
    else:
        console.say("ERROR: Actualizare film esuata")


def add_collection(session: Session, console: Console) -> None:
    """Create a collection, then add each of the given movies to it.

    Raises ValueError when the server accepts the collection but its reply
    carries no JSON object.
    """
    title = console.ask("title=")
    count_text = console.ask("num_movies=")
    try:
        count = _leading_int(count_text)
    except ValueError:
        count = 0

    movie_ids = []
    for index in range(count):
        movie_id = console.ask(f"movie_id[{index}]=")
        if not _is_digits(movie_id):
            console.say(INCOMPLETE_DATA)
            return
        movie_ids.append(int(movie_id))

    if not title:
        console.say(INCOMPLETE_DATA)
        return

    response = session.request(
        "POST", COLLECTIONS_URL, session.user_cookies, JSON_TYPE, {"title": title}, session.token
    )
    if response.code == 400:
        console.say(INCOMPLETE_DATA)
        return
    if not is_success(response.code):
        console.say(NO_ACCESS)
        return

    json_part = basic_extract_json_response(response.raw)
    if json_part is None:
        raise ValueError("collection reply holds no JSON object")
    collection_id = int(json.loads(json_part)["id"])

    for movie_id in movie_ids:
        session.request(
            "POST",
            f"{COLLECTIONS_URL}/{collection_id}/movies",
            session.user_cookies,
            JSON_TYPE,
            {"id": movie_id},
            session.token,
        )

    console.say("SUCCESS: Colectie adaugata")


def show_collections(console: Console, collections: Any) -> None:
    """Print the id and title of every collection."""
    console.say("SUCCESS: Lista colectiilor")
    if collections is None:
        return
    for collection in collections:
        console.say(f"#{int(collection['id'])}: {collection['title']}")


def get_collections(session: Session, console: Console) -> None:
    """List the collections of the library."""
    response = session.request(
        "GET", COLLECTIONS_URL, session.user_cookies, token=session.token
    )
    if not is_success(response.code):
        console.say(NO_ACCESS)
        return

    body = _body_of(response.raw)
    if body is None:
        console.say(NO_ACCESS)
        return

    try:
        root = json.loads(body)
    except ValueError:
        console.say(NO_ACCESS)
        return

    if isinstance(root, list):
        show_collections(console, root)
    elif isinstance(root, dict) and isinstance(root.get("collections"), list):
        show_collections(console, root["collections"])


def get_collection(session: Session, console: Console) -> None:
    """Print the title, owner and movies of one collection."""
    collection_id = console.ask("id=")
    response = session.request(
        "GET", f"{COLLECTIONS_URL}/{collection_id}", session.user_cookies, token=session.token
    )
    if response.code == 404:
        console.say(ID_NOT_FOUND)
        return
    if not is_success(response.code):
        console.say(NO_ACCESS)
        return

    body = _body_of(response.raw)
    if body is None:
        console.say(INVALID_RESPONSE)
        return

    data = _parse_json(basic_extract_json_response(body))
    if not (
        isinstance(data, dict)
        and isinstance(data.get("title"), str)
        and isinstance(data.get("owner"), str)
        and isinstance(data.get("movies"), list)
    ):
        console.say(INVALID_RESPONSE)
        return

    console.say("SUCCESS: Detalii colectie")
    console.say(f"title: {data['title']}")
    console.say(f"owner: {data['owner']}")
    for movie in data["movies"]:
        console.say(f"#{int(movie['id'])}: {movie['title']}")


def delete_collection(session: Session, console: Console) -> None:
    """Delete a collection by id."""
    collection_id = console.ask("id=")
    if not collection_id:
        console.say(INVALID_ID)
        return

    response = session.request(
        "DELETE", f"{COLLECTIONS_URL}/{collection_id}", session.user_cookies, token=session.token
    )
    if is_success(response.code):
        console.say("SUCCESS: Colectie stearsa")
    else:
        console.say(error_message_for(response.code))


def add_movie_to_collection(session: Session, console: Console) -> None:
    """Add one movie to a collection."""
    collection_id = console.ask("collection_id=")
    movie_id = console.ask("movie_id=")
    if not _is_digits(collection_id) or not _is_digits(movie_id):
        console.say(INCOMPLETE_DATA)
        return

    response = session.request(
        "POST",
        f"{COLLECTIONS_URL}/{collection_id}/movies",
        session.user_cookies,
        JSON_TYPE,
        {"id": int(movie_id)},
        session.token,
    )
    if is_success(response.code):
        console.say("SUCCESS: Film adaugat in colectie")
    else:
        console.say(error_message_for(response.code))


def delete_movie_from_collection(session: Session, console: Console) -> None:
    """Remove one movie from a collection."""
    collection_id = console.ask("collection_id=")
    movie_id = console.ask("movie_id=")
    if not collection_id or not movie_id:
        console.say(INVALID_ID)
        return

    response = session.request(
        "DELETE",
        f"{COLLECTIONS_URL}/{collection_id}/movies/{movie_id}",
        session.user_cookies,
        token=session.token,
    )
    if is_success(response.code):
        console.say("SUCCESS: Film sters din colectie")
    else:
        console.say(error_message_for(response.code))