"""Property files for unattended installs.

Two formats are accepted when reading:
- ``.yaml`` / ``.yml`` / ``.json``: a flat mapping of variable -> value
- anything else: Java-style ``name=value`` lines (``#``/``!`` comments)

Templates and saved variables are written as ``name=value`` lines.
Backslashes, line breaks and tabs are escaped, as are the separators in
names and a leading space in values, so written values read back
unchanged.
"""

from pathlib import Path
from typing import IO, Iterable, Mapping

import yaml

from ..core.errors import SpecError

_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t", "f": "\f"}
_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\f": "\\f"}


def _unescape(text: str) -> str:
    out = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "\\")
            out.append(_UNESCAPES.get(nxt, nxt))
        else:
            out.append(ch)
    return "".join(out)


def _escape(text: str, *, name: bool = False) -> str:
    out = []
    for i, ch in enumerate(text):
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif name and (ch in "=: " or (i == 0 and ch in "#!")):
            out.append("\\" + ch)
        elif ch == " " and i == 0:
            out.append("\\ ")
        else:
            out.append(ch)
    return "".join(out)


def _split_line(line: str) -> tuple[str, str]:
    """Split at the first unescaped '=' or ':'."""
    i = 0
    while i < len(line):
        if line[i] == "\\":
            i += 2
            continue
        if line[i] in "=:":
            return line[:i], line[i + 1 :]
        i += 1
    return line, ""


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``name=value`` (or ``name: value``) lines."""
    properties: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.lstrip()
        if not line or line[0] in "#!":
            continue
        name, value = _split_line(line)
        properties[_unescape(name.rstrip())] = _unescape(value.lstrip(" \t\f"))
    return properties


def load_properties(path: Path | str) -> dict[str, str]:
    """Load a property map from disk.

    Raises:
        SpecError: If the file is missing or not a flat mapping.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecError(f"Cannot read properties {path}: {e}") from e

    if path.suffix.lower() not in (".yaml", ".yml", ".json"):
        return parse_properties(text)

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise SpecError(f"Invalid properties file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SpecError(f"Properties file {path} must contain a mapping")
    return {
        str(k): ("true" if v is True else "false" if v is False else "" if v is None else str(v))
        for k, v in data.items()
    }


def write_properties(values: Mapping[str, str], sink: IO[str]) -> None:
    for name, value in values.items():
        sink.write(f"{_escape(name, name=True)}={_escape(value)}\n")


def write_template(names: Iterable[str], sink: IO[str]) -> None:
    """Write an empty ``name=`` line per variable, in order."""
    for name in names:
        sink.write(f"{_escape(name, name=True)}=\n")
