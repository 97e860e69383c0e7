"""Shared variable store and ``${var}`` substitution.

The store is the only state that outlives a collection pass. It maps
variable names to string values and is shared by reference with whatever
drives the installation, so the engine mutates it in place.
"""

import re
from collections.abc import Iterator, Mapping, MutableMapping

_VAR_PATTERN = re.compile(r"\$\{([A-Za-z0-9_.\-]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


class VariableStore(MutableMapping[str, str]):
    """Mutable name -> string mapping.

    No locking: a pass is a single linear traversal and is the only writer.
    """

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._values: dict[str, str] = {}
        if initial:
            for name, value in initial.items():
                self.set(name, value)

    def get(self, name: str, default: str | None = None) -> str | None:  # type: ignore[override]
        return self._values.get(name, default)

    def set(self, name: str, value: str) -> None:
        self._values[name] = "" if value is None else str(value)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"VariableStore({self._values!r})"


class VariableSubstitutor:
    """Expand ``${name}`` and ``$name`` references against a store.

    Unknown references are left untouched, so text without resolvable
    references comes back unchanged.
    """

    def __init__(self, store: Mapping[str, str]):
        self.store = store

    def expand(self, text: str | None) -> str:
        if not text or "$" not in text:
            return text or ""

        def _replace(match: re.Match) -> str:
            name = match.group(1) or match.group(2)
            value = self.store.get(name)
            return match.group(0) if value is None else value

        return _VAR_PATTERN.sub(_replace, text)
