from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

from .exceptions import SyncValidationError


def to_float(x: Any) -> Optional[float]:
    if x is None:
        return None

    try:
        return float(x)

    except (TypeError, ValueError):
        return None


def to_int(x: Any) -> Optional[int]:
    if x is None or isinstance(x, bool):
        return None

    try:
        return int(str(x).strip())

    except (TypeError, ValueError):
        f = to_float(x)
        return int(f) if f is not None and f.is_integer() else None


def same_id(a: Any, b: Any) -> bool:
    ia, ib = to_int(a), to_int(b)
    return ia is not None and ia == ib


def to_iso_instant(src: Any) -> str:
    """
    Convert a commerce timestamp into an ISO-8601 UTC instant with millisecond
    precision, e.g. ``2024-05-01T10:20:30.000Z``. Naive timestamps are UTC.
    """
    if src is None or str(src).strip() == "":
        raise SyncValidationError("Missing timestamp")

    s = str(src).strip()
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        ts = pd.to_datetime(s, utc=True, errors="coerce")
        if pd.isna(ts):
            raise SyncValidationError(f"Invalid timestamp: {s!r}")

        dt = ts.to_pydatetime()

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def capitalize_first(s: Any) -> str:
    s = "" if s is None else str(s)
    return s[:1].upper() + s[1:]


def last_line(s: Any) -> str:
    if s is None:
        return ""

    return str(s).split("\n")[-1]
