from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set
import logging

from .exceptions import PathSyntaxError
from .path import SourcePathResolver

PresencePredicate = Callable[[Any], bool]


def is_truthy(value: Any) -> bool:
    """Default presence check. Drops 0, "", False, [] and {} along with None."""
    return bool(value)


def is_not_none(value: Any) -> bool:
    """Presence check that keeps falsy but meaningful values such as 0 or False."""
    return value is not None


@dataclass(frozen=True)
class MappingWarning:
    field: str
    message: str


class DataFieldMapper:
    """
    Resolve a data-field mapping table against an enriched record.

    The mapping table associates destination data-field names with source
    paths into the record. Only fields known to the destination are kept.
    Unresolvable rules never fail the batch: they are reported as
    MappingWarning entries on ``self.warnings`` and through the logger.

    Example:
        >>> mapper = DataFieldMapper()
        >>> mapper.resolve_fields(
        ...     {"FIRSTNAME": "firstname", "CITY": "billing_address.city"},
        ...     {"FIRSTNAME", "CITY"},
        ...     {"firstname": "Ada", "billing_address": {"city": "London"}},
        ... )
        {'FIRSTNAME': 'Ada', 'CITY': 'London'}
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        is_present: PresencePredicate = is_truthy,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._resolver = SourcePathResolver(is_present)
        self.warnings: List[MappingWarning] = []

    @staticmethod
    def filter_rules(mapping_rules: Mapping[str, Any], allowed_field_names: Iterable[str]) -> Dict[str, Any]:
        allowed = set(allowed_field_names)
        return {name: path for name, path in mapping_rules.items() if name in allowed}

    def resolve_fields(
        self,
        mapping_rules: Mapping[str, Any],
        allowed_field_names: Iterable[str],
        record: Dict[str, Any],
    ) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, path in self.filter_rules(mapping_rules, allowed_field_names).items():
            if not path or not isinstance(path, str):
                self._warn(name, f"Data field [{name}] mapping key is missing")
                continue

            try:
                value = self._resolver.get(record, path)
            except PathSyntaxError as exc:
                self._warn(name, f"Data field [{name}] mapping '{path}' is invalid: {exc}")
                continue

            if not SourcePathResolver.is_missing(value):
                out[name] = value

        return out

    def trace(
        self,
        mapping_rules: Mapping[str, Any],
        allowed_field_names: Iterable[str],
        record: Dict[str, Any],
    ) -> Dict[str, Dict[str, Any]]:
        """Explain, per configured field, what ``resolve_fields`` does with it."""
        allowed = set(allowed_field_names)
        traces: Dict[str, Dict[str, Any]] = {}
        for name, path in mapping_rules.items():
            node: Dict[str, Any] = {"path": path}
            if name not in allowed:
                node["status"] = "not-allowed"
            elif not path or not isinstance(path, str):
                node["status"] = "missing-mapping"
            else:
                try:
                    value = self._resolver.get(record, path)
                except PathSyntaxError as exc:
                    node.update(status="invalid-path", error=str(exc))
                else:
                    if SourcePathResolver.is_missing(value):
                        node["status"] = "absent"
                    else:
                        node.update(status="resolved", value=value)
            traces[name] = node

        return traces

    def _warn(self, name: str, message: str) -> None:
        self.warnings.append(MappingWarning(field=name, message=message))
        self._logger.warning(message)


class AllowedDataFields:
    """Destination data-field names, fetched once and reused for one invocation."""

    def __init__(self, fetch: Callable[[], List[Dict[str, Any]]]) -> None:
        self._fetch = fetch
        self._names: Optional[Set[str]] = None

    def names(self) -> Set[str]:
        if self._names is None:
            self._names = {f["name"] for f in self._fetch() or [] if isinstance(f, dict) and f.get("name")}

        return self._names
