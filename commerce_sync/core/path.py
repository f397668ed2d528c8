from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .exceptions import PathSyntaxError

MAX_SEGMENTS = 3

_MISSING = object()


class SourcePathResolver:
    """
    Resolve mapping source paths against a flat-ish commerce record.

    Supported shapes:
      - key                  e.g. firstname
      - parent.child         e.g. billing_address.city
      - parent.child.N       e.g. billing_address.street.0

    Both `parent` and `parent.child` must be present according to the
    resolver's presence predicate; the optional third segment is an integer
    index into a sequence.
    """

    def __init__(self, is_present: Callable[[Any], bool]) -> None:
        self._is_present = is_present

    @staticmethod
    def split(path: str) -> Tuple[str, ...]:
        segments = tuple(path.split("."))
        if len(segments) > MAX_SEGMENTS:
            raise PathSyntaxError(f"Path '{path}' has more than {MAX_SEGMENTS} segments")

        if any(not s for s in segments):
            raise PathSyntaxError(f"Path '{path}' contains an empty segment")

        if len(segments) == MAX_SEGMENTS and not segments[2].lstrip("-").isdigit():
            raise PathSyntaxError(f"Index '{segments[2]}' in path '{path}' is not an integer")

        return segments

    def get(self, record: Dict[str, Any], path: Optional[str]) -> Any:
        """Return the resolved value or the module-level missing sentinel."""
        if not path:
            return _MISSING

        segments = self.split(path)
        if len(segments) == 1:
            value = record.get(segments[0], _MISSING)
            if value is _MISSING or not self._is_present(value):
                return _MISSING
            return value

        parent = record.get(segments[0])
        if not isinstance(parent, dict) or not self._is_present(parent):
            return _MISSING

        child = parent.get(segments[1], _MISSING)
        if child is _MISSING or not self._is_present(child):
            return _MISSING

        if len(segments) == 2:
            return child

        return self._apply_index(child, int(segments[2]))

    @staticmethod
    def _apply_index(seq: Any, idx: int) -> Any:
        if isinstance(seq, (str, bytes)) or not isinstance(seq, Sequence):
            return _MISSING

        if 0 <= idx < len(seq):
            return seq[idx]

        return _MISSING

    @staticmethod
    def is_missing(value: Any) -> bool:
        return value is _MISSING
