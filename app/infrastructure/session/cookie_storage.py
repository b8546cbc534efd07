from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass
import re

from starlette.responses import Response


MAX_CHUNK_SIZE = 3180
COOKIE_MAX_AGE_SECONDS = 400 * 24 * 60 * 60
BASE64_PREFIX = "base64-"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class CookieWrite:
    name: str
    value: str | None


class CookieSessionStorage:
    """Key/value storage for the auth provider client, backed by request cookies.

    Reads come from the incoming request's cookies. Writes are buffered and
    applied to a response with ``commit``. Large values are split into
    ``<name>.0``, ``<name>.1``... chunks so each cookie stays under browser
    size limits.
    """

    def __init__(
        self,
        *,
        cookies: Mapping[str, str],
        prefix: str = "sb",
        chunk_size: int = MAX_CHUNK_SIZE,
    ):
        self._cookies = dict(cookies)
        self._prefix = prefix
        self._chunk_size = chunk_size
        self._pending: dict[str, str | None] = {}

    def cookie_name(self, key: str) -> str:
        return f"{self._prefix}-{_UNSAFE_NAME_CHARS.sub('-', key)}"

    def get_item(self, key: str) -> str | None:
        name = self.cookie_name(key)
        raw = self._cookies.get(name)
        if raw is None:
            chunks = []
            index = 0
            while f"{name}.{index}" in self._cookies:
                chunks.append(self._cookies[f"{name}.{index}"])
                index += 1
            if not chunks:
                return None
            raw = "".join(chunks)
        return _decode(raw)

    def set_item(self, key: str, value: str) -> None:
        name = self.cookie_name(key)
        self._drop(name)
        encoded = _encode(value)
        if len(encoded) <= self._chunk_size:
            self._write(name, encoded)
            return
        for index, start in enumerate(range(0, len(encoded), self._chunk_size)):
            self._write(f"{name}.{index}", encoded[start:start + self._chunk_size])

    def remove_item(self, key: str) -> None:
        self._drop(self.cookie_name(key))

    def clear(self) -> None:
        """Drops every cookie carrying this storage's prefix."""
        for name in list(self._cookies):
            if name.startswith(f"{self._prefix}-"):
                self._cookies.pop(name)
                self._pending[name] = None

    @property
    def pending_writes(self) -> list[CookieWrite]:
        return [CookieWrite(name=name, value=value) for name, value in self._pending.items()]

    def commit(self, response: Response, *, secure: bool) -> None:
        for write in self.pending_writes:
            if write.value is None:
                response.delete_cookie(key=write.name, path="/")
                continue
            response.set_cookie(
                key=write.name,
                value=write.value,
                max_age=COOKIE_MAX_AGE_SECONDS,
                path="/",
                httponly=True,
                samesite="lax",
                secure=secure,
            )
        self._pending.clear()

    def _drop(self, name: str) -> None:
        for cookie_name in list(self._cookies):
            if cookie_name == name or cookie_name.startswith(f"{name}."):
                self._cookies.pop(cookie_name)
                self._pending[cookie_name] = None

    def _write(self, name: str, value: str) -> None:
        self._cookies[name] = value
        self._pending[name] = value


def _encode(value: str) -> str:
    encoded = base64.urlsafe_b64encode(value.encode("utf-8")).decode("ascii").rstrip("=")
    return f"{BASE64_PREFIX}{encoded}"


def _decode(raw: str) -> str | None:
    if not raw.startswith(BASE64_PREFIX):
        return raw
    payload = raw[len(BASE64_PREFIX):]
    padding = "=" * (-len(payload) % 4)
    try:
        return base64.urlsafe_b64decode(payload + padding).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return None
