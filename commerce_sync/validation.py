import json
from typing import Any, Dict, Iterable, List, Tuple, Union

from .core import DataFieldMapper, MappingError, PathSyntaxError, SourcePathResolver


def parse_mapping_table(raw: Union[str, Dict[str, Any], None]) -> Dict[str, Any]:
    """Load the data-field mapping table from its JSON-object form."""
    if raw is None or raw == "":
        raise MappingError("Data-field mapping is not configured.")

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise MappingError(f"Data-field mapping is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise MappingError("Data-field mapping must be a JSON object.")

    return raw


def validate_mapping_table(mapping: Dict[str, Any], *, raise_on_error: bool = False) -> Tuple[bool, List[str]]:
    errors: List[str] = []

    if not isinstance(mapping, dict):
        errors.append("$: mapping must be an object (dict).")
        return _finish(errors, raise_on_error)

    for name, path in mapping.items():
        if not isinstance(name, str) or not name.strip():
            errors.append("$[<name>]: data-field name must be a non-empty string.")
            continue

        if not isinstance(path, str) or not path:
            errors.append(f"$.{name}: source path must be a non-empty string.")
            continue

        try:
            SourcePathResolver.split(path)
        except PathSyntaxError as e:
            errors.append(f"$.{name}: {e}")

    return _finish(errors, raise_on_error)


def _finish(errors: List[str], raise_on_error: bool) -> Tuple[bool, List[str]]:
    if errors and raise_on_error:
        raise MappingError("Invalid mapping:\n- " + "\n- ".join(errors))
    return (len(errors) == 0, errors)


def validate_with_warnings(mapping: Dict[str, Any], allowed_field_names: Iterable[str]) -> Dict[str, Any]:
    ok, errors = validate_mapping_table(mapping)
    out: Dict[str, Any] = {"ok": ok, "errors": errors, "warnings": []}
    if not isinstance(mapping, dict):
        return out

    allowed = set(allowed_field_names)
    for name in mapping:
        if name not in allowed:
            out["warnings"].append(f"Data field '{name}' is not defined on the destination and will be skipped")

    return out


def dry_run(mapping: Dict[str, Any], allowed_field_names: Iterable[str], sample: Dict[str, Any]) -> Dict[str, Any]:
    ok, errors = validate_mapping_table(mapping)
    if not ok:
        return {"ok": False, "stage": "structure", "errors": errors}

    allowed = set(allowed_field_names)
    mapper = DataFieldMapper()
    fields = mapper.resolve_fields(mapping, allowed, sample)
    return {
        "ok": True,
        "fields": fields,
        "warnings": [w.message for w in mapper.warnings],
        "trace": mapper.trace(mapping, allowed, sample),
    }
