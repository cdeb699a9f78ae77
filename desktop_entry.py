"""Reading and querying freedesktop desktop entry files.

Entries are parsed lazily: constructing one from a path or from text does
no work until a value is requested.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "Desktop Entry"
REQUIRED_FIELDS = ("Type", "Name")
RECOMMENDED_FIELDS = ("Encoding",)

_LINE_SPLIT = re.compile(r"\r\n|[\r\n]")
_COMMENT = re.compile(r"^\s*#")
_GROUP = re.compile(r"^\[(.+)\]$")
_KEY_VALUE = re.compile(r"^(.+?)=(.*)$")


class DesktopEntryError(Exception):
    pass


class ParseError(DesktopEntryError):
    def __init__(self, message, lineno=None):
        if lineno is not None:
            message = f"{message} (line {lineno})"
        super().__init__(message)
        self.lineno = lineno


class UsageError(DesktopEntryError):
    pass


class SemanticError(DesktopEntryError):
    pass


def parse(text):
    groups = {}
    current = None
    for lineno, line in enumerate(_LINE_SPLIT.split(text), start=1):
        if not line.strip() or _COMMENT.match(line):
            continue

        match = _GROUP.match(line)
        if match:
            current = groups.setdefault(match.group(1), {})
            continue
        if current is None:
            raise ParseError("content before any group header", lineno)

        match = _KEY_VALUE.match(line)
        if not match:
            raise ParseError("unrecognized line", lineno)
        key, value = match.groups()
        current[key] = value
    return groups


def check_fields(data, source="<data>"):
    """Log warnings for missing or unsupported fields. Never raises."""
    for name in REQUIRED_FIELDS:
        if name not in data:
            logger.warning("Required field %s missing in desktop entry %s", name, source)
    for name in RECOMMENDED_FIELDS:
        if name not in data:
            logger.warning("Recommended field %s missing in desktop entry %s", name, source)
    encoding = data.get("Encoding")
    if encoding is not None and encoding != "UTF-8":
        logger.warning(
            "Encoding %s not supported for desktop entry %s, reading as UTF-8",
            encoding,
            source,
        )


@dataclass
class Unparsed:
    path: Optional[Path] = None
    text: Optional[str] = None


@dataclass
class Parsed:
    groups: dict = field(default_factory=dict)


class DesktopEntry:
    def __init__(self, path=None, text=None):
        if (path is None) == (text is None):
            raise UsageError("DesktopEntry needs exactly one of path or text")
        self.file = str(path) if path is not None else None
        self._state = Unparsed(Path(path) if path is not None else None, text)

    @classmethod
    def from_file(cls, path):
        return cls(path=path)

    @classmethod
    def from_data(cls, text):
        return cls(text=text)

    def __repr__(self):
        source = self.file if self.file is not None else "<data>"
        return f"<DesktopEntry {source}>"

    @property
    def is_parsed(self):
        return isinstance(self._state, Parsed)

    def ensure_parsed(self):
        state = self._state
        if isinstance(state, Parsed):
            return state
        if state.text is not None:
            text = state.text
        else:
            logger.debug("Reading desktop entry %s", state.path)
            text = state.path.read_text(encoding="utf-8")
        groups = parse(text)
        self._state = Parsed(groups)
        check_fields(groups.get(DEFAULT_GROUP, {}), self.file or "<data>")
        return self._state

    def parse(self):
        """Force parsing now instead of on first access; returns self."""
        self.ensure_parsed()
        return self

    @property
    def groups(self):
        return self.ensure_parsed().groups

    @property
    def data(self):
        return self.groups.get(DEFAULT_GROUP, {})

    def get_value(self, key, group=None, locale=None):
        """Return the raw string stored for *key*, or None.

        *locale* is appended literally as ``key[locale]``; there is no
        fallback to a less specific locale.
        """
        if not key:
            raise UsageError("usage: get_value(key, group=None, locale=None)")
        if not group:
            group = DEFAULT_GROUP
        if locale:
            key = f"{key}[{locale}]"
        return self.groups.get(group, {}).get(key)
