"""Socket transport, response reading and response parsing helpers."""

from __future__ import annotations

import re
import socket
from collections.abc import Sequence
from contextlib import closing
from dataclasses import dataclass

from movieclient.messages import (
    compute_delete_request,
    compute_get_request,
    compute_post_request,
    compute_put_request,
)

BUFLEN = 4096
HEADER_TERMINATOR = b"\r\n\r\n"
CONTENT_LENGTH = b"Content-Length: "
SET_COOKIE = "Set-Cookie: "

_STATUS_RE = re.compile(r"HTTP/\s*\S+\s*([+-]?\d+)")
_LONG_RE = re.compile(rb"[ \t\n\v\f\r]*([+-]?\d+)")


@dataclass(frozen=True)
class HTTPResponse:
    """Status code and full raw text of an HTTP response."""

    code: int
    raw: str


class ClientConnectionError(Exception):
    """Raised when the server cannot be reached, written to or read from."""


def find_insensitive(data: bytes, needle: bytes) -> int:
    """Position of needle in data ignoring ASCII case, or -1."""
    if len(needle) > len(data):
        return -1
    return bytes(data).lower().find(bytes(needle).lower())


def _parse_long(data: bytes, start: int) -> int:
    match = _LONG_RE.match(bytes(data), start)
    return int(match.group(1)) if match else 0


def open_connection(host: str, port: int) -> socket.socket:
    """Open a TCP connection to host:port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((host, port))
    except OSError as exc:
        sock.close()
        raise ClientConnectionError("ERROR connecting") from exc
    return sock


def send_to_server(sock: socket.socket, message: str | bytes) -> None:
    """Write the whole message to the socket."""
    data = message.encode("utf-8") if isinstance(message, str) else message
    try:
        sock.sendall(data)
    except OSError as exc:
        raise ClientConnectionError("ERROR writing message to socket") from exc


def _read_chunk(sock: socket.socket) -> bytes:
    try:
        return sock.recv(BUFLEN)
    except OSError as exc:
        raise ClientConnectionError("ERROR reading response from socket") from exc


def receive_from_server(sock: socket.socket) -> str:
    """Read one response: headers, then as many body bytes as Content-Length says.

    Without a Content-Length header the response is read until the peer closes.
    """
    data = bytearray()
    header_end = 0
    content_length = 0

    while chunk := _read_chunk(sock):
        data += chunk
        found = data.find(HEADER_TERMINATOR)
        if found < 0:
            continue
        header_end = found + len(HEADER_TERMINATOR)
        start = find_insensitive(data, CONTENT_LENGTH)
        if start < 0:
            continue
        content_length = _parse_long(data, start + len(CONTENT_LENGTH))
        break

    total = header_end + content_length
    while len(data) < total:
        chunk = _read_chunk(sock)
        if not chunk:
            break
        data += chunk

    text = bytes(data).split(b"\0", 1)[0]
    return text.decode("utf-8", errors="replace")


def status_code(raw: str) -> int:
    """Status code from the status line of a raw response, or 0."""
    match = _STATUS_RE.match(raw)
    return int(match.group(1)) if match else 0


def basic_extract_json_response(text: str) -> str | None:
    """The text from the first '{"' onwards, or None."""
    start = text.find('{"')
    return text[start:] if start >= 0 else None


def extract_cookies(response: str) -> list[str]:
    """Values of every complete Set-Cookie header line in the response."""
    cookies = []
    pos = 0
    while (pos := response.find(SET_COOKIE, pos)) >= 0:
        pos += len(SET_COOKIE)
        end = response.find("\r\n", pos)
        if end < 0:
            break
        cookies.append(response[pos:end])
        pos = end + 2
    return cookies


def do_request(
    host: str,
    port: int,
    method: str,
    url: str,
    query_params: str | None = None,
    content_type: str | None = None,
    body_data: Sequence[str] = (),
    cookies: Sequence[str] | None = None,
    token: str | None = None,
) -> HTTPResponse:
    """Send one request over a fresh connection and return the response.

    An unsupported method yields HTTPResponse(0, "") without connecting.
    """
    if method == "GET":
        message = compute_get_request(host, url, query_params, cookies, token)
    elif method == "POST":
        message = compute_post_request(host, url, content_type, body_data, cookies, token)
    elif method == "DELETE":
        message = compute_delete_request(host, url, cookies, token)
    elif method == "PUT":
        message = compute_put_request(host, url, content_type, body_data[0], cookies, token)
    else:
        return HTTPResponse(0, "")

    with closing(open_connection(host, port)) as sock:
        send_to_server(sock, message)
        raw = receive_from_server(sock)

    return HTTPResponse(status_code(raw), raw)