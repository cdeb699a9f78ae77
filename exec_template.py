"""Expansion of the Exec key of application desktop entries.

Field codes are documented at
https://specifications.freedesktop.org/desktop-entry-spec/latest/exec-variables.html
"""

import logging
import os
import re
from dataclasses import dataclass

from desktop_entry import SemanticError, UsageError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"%.")
_ESCAPED_PERCENT = re.compile(r"%%")
_URI_SCHEME = re.compile(r"^\w+://")
_FILE_SCHEME = re.compile(r"^file://+")
_LIST_CODES = re.compile(r"%[FUDN]")
_URI_CODES = re.compile(r"%[uU]")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    code: str

    @property
    def letter(self):
        return self.code[1]


def tokenize(template):
    tokens = []
    pos = 0
    for match in _PLACEHOLDER.finditer(template):
        if match.start() > pos:
            tokens.append(Literal(template[pos : match.start()]))
        tokens.append(Placeholder(match.group(0)))
        pos = match.end()
    if pos < len(template):
        tokens.append(Literal(template[pos:]))
    return tokens


def to_path(arg):
    if not _URI_SCHEME.match(arg):
        return arg
    match = _FILE_SCHEME.match(arg)
    if match:
        # keep the path's own root after the authority slashes
        return "/" + arg[match.end() :]
    raise SemanticError(f"cannot resolve remote resource to a local path: {arg}")


def to_uri(arg):
    if _URI_SCHEME.match(arg):
        return arg
    path = os.path.abspath(arg)
    if path.startswith("/"):
        return "file://" + path
    return "file:///" + path


def quote(values):
    return " ".join(f"'{value}'" for value in values)


def _exec_template(entry):
    template = entry.data.get("Exec")
    if template is None:
        raise SemanticError(f"missing Exec in desktop entry {entry!r}")
    return template


def _strip_escapes(template):
    return _ESCAPED_PERCENT.sub("", template)


def wants_uris(entry):
    return bool(_URI_CODES.search(_strip_escapes(_exec_template(entry))))


def wants_list(entry):
    template = _strip_escapes(_exec_template(entry))
    return "%" not in template or bool(_LIST_CODES.search(template))


def _directory(path):
    if os.path.isdir(path):
        return path
    return os.path.dirname(path) or "."


def _expand_placeholder(letter, entry, args):
    data = entry.data
    kind = letter.lower()
    if letter == "%":
        return "%"
    if kind == "f":
        return quote(to_path(arg) for arg in args)
    if kind == "u":
        return quote(to_uri(arg) for arg in args)
    if kind == "d":
        return quote(_directory(to_path(arg)) for arg in args)
    if kind == "n":
        return quote(os.path.basename(to_path(arg)) for arg in args)
    if letter == "i":
        icon = data.get("Icon")
        return f"--icon '{icon}'" if icon else ""
    if letter == "c":
        return data.get("Name") or ""
    if letter == "k":
        return entry.file or ""
    if letter == "v":
        return data.get("Dev") or ""
    logger.debug("Dropping unknown field code %%%s in %r", letter, entry)
    return ""


def expand(entry, args):
    """Return the command line for running *entry* on *args*.

    Arguments are paths or URIs; each substituted value is wrapped in
    single quotes. Embedded single quotes are not escaped.
    """
    args = list(args)
    if entry.data.get("Type") != "Application":
        raise SemanticError(f"desktop entry {entry!r} is not an application")
    if not wants_list(entry) and len(args) != 1:
        raise UsageError("this application accepts exactly one argument")

    template = _exec_template(entry)
    if "%" not in _strip_escapes(template):
        template += " %F"

    parts = []
    for token in tokenize(template):
        if isinstance(token, Literal):
            parts.append(token.text)
        else:
            parts.append(_expand_placeholder(token.letter, entry, args))
    return "".join(parts)
