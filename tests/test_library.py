import io
import json
from dataclasses import dataclass

import pytest

from movieclient import library
from movieclient.connection import HTTPResponse
from movieclient.session import Console, Session


@dataclass
class Call:
    method: str
    url: str
    content_type: object
    body_data: tuple
    cookies: list
    token: object

    @property
    def body(self):
        return json.loads(self.body_data[0])


class FakeServer:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, host, port, method, url, query_params, content_type, body_data, cookies, token):
        self.calls.append(Call(method, url, content_type, tuple(body_data), list(cookies), token))
        if self.responses:
            return self.responses.pop(0)
        return reply(200, "")


def reply(code, body):
    raw = f"HTTP/1.1 {code} X\r\nContent-Type: application/json\r\n\r\n{body}"
    return HTTPResponse(code, raw)


def make(input_text, *responses):
    server = FakeServer(*responses)
    session = Session(transport=server, user_cookies=["placeholder"], token="token")
    out = io.StringIO()
    console = Console(io.StringIO(input_text), out)
    return session, console, out, server


def test_add_movie_sends_json_and_reports_success():
    session, console, out, server = make("Dune\n2021\nSpice\n8.5\n", reply(201, ""))
    library.add_movie(session, console)
    assert out.getvalue().endswith("SUCCESS: Film adaugat\n")
    (call,) = server.calls
    assert call.method == "POST"
    assert call.url == "/api/v1/tema/library/movies"
    assert call.content_type == "application/json"
    assert call.cookies == ["placeholder"]
    assert call.token == "token"
    assert call.body == {"title": "Dune", "year": 2021, "description": "Spice", "rating": 8.5}


def test_add_movie_takes_leading_number_of_year():
    session, console, out, server = make("Dune\n2021abc\nSpice\n7\n")
    library.add_movie(session, console)
    assert server.calls[0].body["year"] == 2021
    assert server.calls[0].body["rating"] == 7.0


@pytest.mark.parametrize(
    "text", ["Dune\nabc\nSpice\n8\n", "Dune\n2021\nSpice\nhigh\n", "\n2021\nSpice\n8\n", "Dune\n2021\n\n8\n"]
)
def test_add_movie_rejects_invalid_input(text):
    session, console, out, server = make(text)
    library.add_movie(session, console)
    assert out.getvalue().endswith("ERROR: Invalid input\n")
    assert server.calls == []


@pytest.mark.parametrize(
    "code, message",
    [(403, "ERROR: Fara acces library"), (400, "ERROR: Date invalide"), (500, "ERROR: Adaugare film esuata")],
)
def test_add_movie_failures(code, message):
    session, console, out, server = make("Dune\n2021\nSpice\n8\n", reply(code, ""))
    library.add_movie(session, console)
    assert out.getvalue().splitlines()[-1].endswith(message)
    assert out.getvalue().endswith(message + "\n")


def test_show_movies_lists_each_movie():
    out = io.StringIO()
    movies = [{"id": 3, "title": "Alien"}, {"id": 9, "title": "Heat"}]
    library.show_movies(Console(io.StringIO(), out), movies)
    assert out.getvalue().splitlines() == ["SUCCESS: Lista filmelor", "#3 Alien", "#9 Heat"]


def test_get_movies_from_object():
    movies = [{"id": 4, "title": "Ran"}]
    session, console, out, server = make("", reply(200, json.dumps({"movies": movies})))
    library.get_movies(session, console)
    assert out.getvalue().splitlines() == ["SUCCESS: Lista filmelor", "#4 Ran"]
    assert server.calls[0].url == "/api/v1/tema/library/movies"
    assert server.calls[0].method == "GET"


@pytest.mark.parametrize(
    "response",
    [reply(403, ""), reply(200, "nothing"), reply(200, '[{"id": 1, "title": "A"}]'), reply(200, '{"other": 1}')],
)
def test_get_movies_failures(response):
    session, console, out, server = make("", response)
    library.get_movies(session, console)
    assert out.getvalue() == "ERROR: Fara acces library\n"


def test_get_movie_prints_body():
    body = '{"id":2,"title":"Up"}'
    session, console, out, server = make("2\n", reply(200, body))
    library.get_movie(session, console)
    assert out.getvalue().endswith(body + "\n")
    assert server.calls[0].url == "/api/v1/tema/library/movies/2"


def test_get_movie_without_body_separator():
    session, console, out, server = make("2\n", HTTPResponse(200, "HTTP/1.1 200 OK"))
    library.get_movie(session, console)
    text = out.getvalue()
    assert text.endswith("{}\n")
    assert "SUCCESS" not in text and "ERROR" not in text


def test_get_movie_not_found():
    session, console, out, server = make("99\n", reply(404, ""))
    library.get_movie(session, console)
    assert out.getvalue().endswith("ERROR: ID invalid\n")
    assert server.calls[0].url == "/api/v1/tema/library/movies/99"


def test_delete_movie_empty_id_sends_nothing():
    session, console, out, server = make("\n")
    library.delete_movie(session, console)
    assert out.getvalue().endswith("ERROR: Invalid ID\n")
    assert server.calls == []


@pytest.mark.parametrize(
    "code, message",
    [
        (200, "SUCCESS: Film sters"),
        (404, "ERROR: ID invalid"),
        (403, "ERROR: Fara acces library"),
        (500, "ERROR: Stergere film esuata"),
    ],
)
def test_delete_movie_outcomes(code, message):
    session, console, out, server = make("5\n", reply(code, ""))
    library.delete_movie(session, console)
    assert out.getvalue().endswith(message + "\n")
    assert server.calls[0].method == "DELETE"
    assert server.calls[0].url == "/api/v1/tema/library/movies/5"


def test_update_movie_puts_to_movie_url():
    session, console, out, server = make("5\nHeat\n1995\nCrime\n8.3\n", reply(200, ""))
    library.update_movie(session, console)
    assert out.getvalue().endswith("SUCCESS: Film actualizat\n")
    call = server.calls[0]
    assert call.method == "PUT"
    assert call.url == "/api/v1/tema/library/movies/5"
    assert call.body == {"title": "Heat", "year": 1995, "description": "Crime", "rating": 8.3}


@pytest.mark.parametrize(
    "code, message",
    [
        (403, "ERROR: Fara acces library"),
        (404, "ERROR: ID invalid"),
        (400, "ERROR: Date invalide"),
        (500, "ERROR: Actualizare film esuata"),
    ],
)
def test_update_movie_failures(code, message):
    session, console, out, server = make("5\nHeat\n1995\nCrime\n8\n", reply(code, ""))
    library.update_movie(session, console)
    assert out.getvalue().endswith(message + "\n")
    assert server.calls[0].method == "PUT"


def test_add_collection_creates_then_adds_movies():
    session, console, out, server = make(
        "Favs\n2\n3\n8\n", reply(201, '{"id": 7, "title": "Favs"}'), reply(201, ""), reply(201, "")
    )
    library.add_collection(session, console)
    assert out.getvalue().endswith("SUCCESS: Colectie adaugata\n")
    first, *rest = server.calls
    assert first.url == "/api/v1/tema/library/collections"
    assert first.body == {"title": "Favs"}
    assert [c.url for c in rest] == ["/api/v1/tema/library/collections/7/movies"] * 2
    assert [c.body for c in rest] == [{"id": 3}, {"id": 8}]


@pytest.mark.parametrize("text", ["Favs\n1\nx1\n", "Favs\n1\n\n", "\n1\n4\n"])
def test_add_collection_rejects_bad_input(text):
    session, console, out, server = make(text)
    library.add_collection(session, console)
    assert out.getvalue().endswith("ERROR: Date invalide/incomplete\n")
    assert server.calls == []


def test_add_collection_with_unreadable_count_adds_no_movies():
    session, console, out, server = make("Favs\nmany\n", reply(201, '{"id": 7}'))
    library.add_collection(session, console)
    assert len(server.calls) == 1
    assert out.getvalue().endswith("SUCCESS: Colectie adaugata\n")


@pytest.mark.parametrize(
    "code, message", [(400, "ERROR: Date invalide/incomplete"), (403, "ERROR: Fara acces library")]
)
def test_add_collection_create_failures(code, message):
    session, console, out, server = make("Favs\n0\n", reply(code, ""))
    library.add_collection(session, console)
    assert out.getvalue().endswith(message + "\n")
    assert len(server.calls) == 1


def test_add_collection_reply_without_json_raises():
    session, console, out, server = make("Favs\n0\n", reply(201, "created"))
    with pytest.raises(ValueError):
        library.add_collection(session, console)


def test_show_collections_none_prints_only_header():
    out = io.StringIO()
    library.show_collections(Console(io.StringIO(), out), None)
    assert out.getvalue() == "SUCCESS: Lista colectiilor\n"


@pytest.mark.parametrize("wrap", [lambda c: c, lambda c: {"collections": c}])
def test_get_collections_lists_array_or_object(wrap):
    collections = [{"id": 1, "title": "Old"}, {"id": 2, "title": "New"}]
    session, console, out, server = make("", reply(200, json.dumps(wrap(collections))))
    library.get_collections(session, console)
    assert out.getvalue().splitlines() == ["SUCCESS: Lista colectiilor", "#1: Old", "#2: New"]


@pytest.mark.parametrize(
    "response", [reply(401, ""), HTTPResponse(200, "HTTP/1.1 200 OK"), reply(200, "{bad")]
)
def test_get_collections_failures(response):
    session, console, out, server = make("", response)
    library.get_collections(session, console)
    assert out.getvalue() == "ERROR: Fara acces library\n"


def test_get_collections_other_object_prints_nothing():
    session, console, out, server = make("", reply(200, '{"x": 1}'))
    library.get_collections(session, console)
    assert out.getvalue() == ""


def test_get_collection_prints_details():
    data = {"title": "Favs", "owner": "alice", "movies": [{"id": 3, "title": "Alien"}]}
    session, console, out, server = make("7\n", reply(200, json.dumps(data)))
    library.get_collection(session, console)
    lines = out.getvalue().splitlines()
    assert lines[0].endswith("SUCCESS: Detalii colectie")
    assert lines[1:] == ["title: Favs", "owner: alice", "#3: Alien"]
    assert server.calls[0].url == "/api/v1/tema/library/collections/7"


@pytest.mark.parametrize(
    "response, message",
    [
        (reply(404, ""), "ERROR: ID invalid"),
        (reply(403, ""), "ERROR: Fara acces library"),
        (reply(200, '{"title": "Favs", "movies": []}'), "ERROR: Raspuns invalid"),
        (reply(200, "plain"), "ERROR: Raspuns invalid"),
    ],
)
def test_get_collection_failures(response, message):
    session, console, out, server = make("7\n", response)
    library.get_collection(session, console)
    text = out.getvalue()
    assert text.endswith(message + "\n")
    assert "SUCCESS" not in text


@pytest.mark.parametrize(
    "code, message",
    [
        (200, "SUCCESS: Colectie stearsa"),
        (403, "ERROR: Nu sunteti owner"),
        (404, "ERROR: ID invalid"),
        (500, "ERROR: Fara acces la library"),
    ],
)
def test_delete_collection_outcomes(code, message):
    session, console, out, server = make("7\n", reply(code, ""))
    library.delete_collection(session, console)
    assert out.getvalue().endswith(message + "\n")
    assert server.calls[0].url == "/api/v1/tema/library/collections/7"


def test_delete_collection_empty_id():
    session, console, out, server = make("\n")
    library.delete_collection(session, console)
    assert out.getvalue().endswith("ERROR: Invalid ID\n")
    assert server.calls == []


def test_add_movie_to_collection_success():
    session, console, out, server = make("7\n5\n", reply(201, ""))
    library.add_movie_to_collection(session, console)
    assert out.getvalue().endswith("SUCCESS: Film adaugat in colectie\n")
    assert server.calls[0].url == "/api/v1/tema/library/collections/7/movies"
    assert server.calls[0].body == {"id": 5}


@pytest.mark.parametrize("text", ["7\n\n", "a\n5\n", "7\n5b\n"])
def test_add_movie_to_collection_rejects_non_digits(text):
    session, console, out, server = make(text)
    library.add_movie_to_collection(session, console)
    assert out.getvalue().endswith("ERROR: Date invalide/incomplete\n")
    assert server.calls == []


def test_add_movie_to_collection_failure_uses_error_table():
    session, console, out, server = make("7\n5\n", reply(403, ""))
    library.add_movie_to_collection(session, console)
    assert out.getvalue().endswith("ERROR: Nu sunteti owner\n")
    assert len(server.calls) == 1


def test_delete_movie_from_collection():
    session, console, out, server = make("7\n5\n", reply(200, ""))
    library.delete_movie_from_collection(session, console)
    assert out.getvalue().endswith("SUCCESS: Film sters din colectie\n")
    assert server.calls[0].method == "DELETE"
    assert server.calls[0].url == "/api/v1/tema/library/collections/7/movies/5"


def test_delete_movie_from_collection_empty_and_failure():
    session, console, out, server = make("7\n\n")
    library.delete_movie_from_collection(session, console)
    assert out.getvalue().endswith("ERROR: Invalid ID\n")
    assert server.calls == []

    session, console, out, server = make("7\n5\n", reply(400, ""))
    library.delete_movie_from_collection(session, console)
    assert out.getvalue().endswith("ERROR: Date invalide/incomplete\n")