"""Construction of raw HTTP/1.1 request messages."""

from __future__ import annotations

from collections.abc import Sequence

CRLF = "\r\n"


def _build(
    method: str,
    host: str,
    target: str,
    cookies: Sequence[str] | None,
    token: str | None,
    content_type: str | None = None,
    payload: str | None = None,
) -> str:
    lines = [f"{method} {target} HTTP/1.1", f"Host: {host}"]
    if payload is not None:
        lines.append(f"Content-Type: {content_type}")
        lines.append(f"Content-Length: {len(payload.encode('utf-8'))}")
    if cookies:
        lines.append("Cookie: " + "; ".join(cookies))
    if token is not None:
        lines.append(f"Authorization: Bearer {token}")
    lines.append("")
    if payload is not None:
        lines.append(payload)
    return "".join(f"{line}{CRLF}" for line in lines)


def compute_get_request(
    host: str,
    url: str,
    query_params: str | None = None,
    cookies: Sequence[str] | None = None,
    token: str | None = None,
) -> str:
    """Build a GET request, with an optional query string, cookies and bearer token."""
    target = f"{url}?{query_params}" if query_params else url
    return _build("GET", host, target, cookies, token)


def compute_post_request(
    host: str,
    url: str,
    content_type: str | None,
    body_data: Sequence[str] = (),
    cookies: Sequence[str] | None = None,
    token: str | None = None,
) -> str:
    """Build a POST request whose body is the fields of body_data joined by '&'."""
    return _build("POST", host, url, cookies, token, content_type, "&".join(body_data))


def compute_delete_request(
    host: str,
    url: str,
    cookies: Sequence[str] | None = None,
    token: str | None = None,
) -> str:
    """Build a DELETE request."""
    return _build("DELETE", host, url, cookies, token)


def compute_put_request(
    host: str,
    url: str,
    content_type: str | None,
    payload: str,
    cookies: Sequence[str] | None = None,
    token: str | None = None,
) -> str:
    """Build a PUT request carrying payload as its body."""
    return _build("PUT", host, url, cookies, token, content_type, payload)