"""Key lookup and squash-path walking over raw input documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple, Union


def key_matches(candidate: Any, key: str) -> bool:
    """Check whether a document key names ``key``.

    Plain keys compare directly; symbolic keys (enum members) match on
    their ``value``.
    """
    if candidate == key:
        return True
    return getattr(candidate, "value", None) == key


def lookup(document: Any, key: str) -> Tuple[bool, Any]:
    """Return ``(found, value)`` for a top-level key of a mapping."""
    if not isinstance(document, Mapping):
        return False, None
    if key in document:
        return True, document[key]
    for candidate, value in document.items():
        if key_matches(candidate, key):
            return True, value
    return False, None


@dataclass(frozen=True)
class SquashPath:
    """Fixed sequence of keys walked through nested mappings."""

    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, path: Union[str, Sequence[str]]) -> "SquashPath":
        if isinstance(path, str):
            return cls(segments=(path,))
        return cls(segments=tuple(path))

    @property
    def root(self) -> str:
        return self.segments[0]

    def to_string(self) -> str:
        return ".".join(self.segments)

    def walk(self, document: Any) -> Tuple[bool, Any]:
        """Walk the path through ``document``.

        ``found`` reports whether the root key is present. Past the root, a
        missing key or a non-mapping node yields ``None`` rather than raising.
        """
        found, current = lookup(document, self.root)
        if not found:
            return False, None
        for segment in self.segments[1:]:
            present, current = lookup(current, segment)
            if not present:
                return True, None
        return True, current
