"""Decode pass (https://passwordstore.org) entries into structured data.

pass entries follow an informal schema:

    <password>
    url: https://example.com
    login: someone
    free-form notes...

- the first line is always the password, kept verbatim
- `url:` / `login:` lines (case-sensitive, column 0) set those fields;
  the last one wins
- every other line goes to notes with a trailing newline

Nothing here does I/O or logging.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from passentry.errors import InvalidData, InvalidName

URL_PREFIX = "url:"
LOGIN_PREFIX = "login:"

FIELDS = ("name", "password", "login", "url", "notes")


@dataclass(frozen=True)
class Entry:
    name: str
    password: str | None = None
    login: str | None = None
    url: str | None = None
    notes: str | None = None

    def to_dict(self, *, omit_none: bool = False) -> dict[str, str | None]:
        out: dict[str, str | None] = {}
        for k in FIELDS:
            v = getattr(self, k)
            if v is None and omit_none:
                continue
            out[k] = v
        return out

    def to_json(self, *, omit_none: bool = False, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(omit_none=omit_none), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Entry:
        """Build an Entry from its `to_dict` form (e.g. parsed JSON)."""
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidName()

        values: dict[str, str | None] = {}
        for k in FIELDS[1:]:
            v = raw.get(k)
            if v is not None and not isinstance(v, str):
                raise InvalidData(f"invalid data: {k} must be a string or null")
            values[k] = v
        return cls(name=name, **values)


def decode(name: str, text: str) -> Entry:
    """Decode an entry body.

    Raises:
        InvalidName: `name` is empty.
        InvalidData: `text` is empty.
    """
    if len(name) < 1:
        raise InvalidName()
    if len(text) < 1:
        raise InvalidData()

    password: str | None = None
    login: str | None = None
    url: str | None = None
    notes = ""

    # only \n separates lines; a trailing \r stays part of the line
    for i, line in enumerate(text.split("\n")):
        if i == 0:
            password = line
            continue
        if line.startswith(URL_PREFIX):
            url = line[len(URL_PREFIX) :].strip()
            continue
        if line.startswith(LOGIN_PREFIX):
            login = line[len(LOGIN_PREFIX) :].strip()
            continue
        notes += line + "\n"

    return Entry(
        name=name,
        password=password,
        login=login,
        url=url,
        notes=notes if len(notes) > 1 else None,
    )


def decode_bytes(name: str, data: bytes) -> Entry:
    """Decode UTF-8 bytes, e.g. the stdout of `pass show <name>`.

    Raises:
        InvalidData: `data` is empty or not valid UTF-8.
        InvalidName: `name` is empty.
    """
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidData(f"invalid data: not valid UTF-8 at byte {e.start}") from e
    return decode(name, text)
