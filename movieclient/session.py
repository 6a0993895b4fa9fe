"""Client session state, terminal console and shared response helpers."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

from movieclient.connection import HTTPResponse, do_request

DEFAULT_HOST = "63.32.125.183"
DEFAULT_PORT = 8081

_ERROR_MESSAGES = {
    400: "ERROR: Date invalide/incomplete",
    403: "ERROR: Nu sunteti owner",
    404: "ERROR: ID invalid",
}
_DEFAULT_ERROR = "ERROR: Fara acces la library"


def is_success(code: int) -> bool:
    """True for a 2xx status code."""
    return 200 <= code < 300


def error_message_for(code: int) -> str:
    """Error line shown for a failed collection operation with this status code."""
    return _ERROR_MESSAGES.get(code, _DEFAULT_ERROR)


def _dump_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


Transport = Callable[..., HTTPResponse]


@dataclass
class Session:
    """Server address plus the cookies and access token gathered so far."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    admin_cookies: list[str] = field(default_factory=list)
    user_cookies: list[str] = field(default_factory=list)
    token: str | None = None
    transport: Transport = do_request

    def request(
        self,
        method: str,
        url: str,
        cookies: Sequence[str] | None = None,
        content_type: str | None = None,
        body: Any = None,
        token: str | None = None,
    ) -> HTTPResponse:
        """Send one request; a body other than None is sent as compact JSON."""
        body_data = () if body is None else (_dump_json(body),)
        return self.transport(
            self.host,
            self.port,
            method,
            url,
            None,
            content_type,
            body_data,
            list(cookies or ()),
            token,
        )


class Console:
    """Line-oriented prompts and messages over a pair of text streams."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    @property
    def _in(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def ask(self, prompt: str) -> str:
        """Show prompt and return the next input line without its newline ('' at end of input)."""
        self._out.write(prompt)
        self._out.flush()
        line = self._in.readline()
        return line[:-1] if line.endswith("\n") else line

    def readline(self) -> str | None:
        """Next raw input line without its newline, or None at end of input."""
        line = self._in.readline()
        if not line:
            return None
        return line[:-1] if line.endswith("\n") else line

    def say(self, text: str) -> None:
        """Write text as one output line."""
        self._out.write(f"{text}\n")
        self._out.flush()