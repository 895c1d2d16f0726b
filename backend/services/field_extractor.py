# services/field_extractor.py

import json
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

from services.errors import TransformError

# bounds of the Integer column type
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class FieldSpec:
    key: str        # key in the draft JSON
    column: str     # attribute on ExtractedFields / MasterRecord
    kind: type      # str or int
    max_length: int | None = None


# Renamed keys get a new version entry; existing entries are never edited.
FIELD_MAPPINGS: dict[int, tuple[FieldSpec, ...]] = {
    1: (
        FieldSpec("name", "name", str, max_length=255),
        FieldSpec("email", "email", str, max_length=255),
        FieldSpec("phone", "phone", str, max_length=64),
        FieldSpec("address", "address", str),
        FieldSpec("qualification", "qualification", str, max_length=255),
        FieldSpec("experience", "experience", int),
        FieldSpec("skills", "skills", str),
        FieldSpec("projectDetails", "project_details", str),
    ),
}

CURRENT_MAPPING_VERSION = 1


@dataclass
class ExtractedFields:
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    qualification: str | None = None
    experience: int | None = None
    skills: str | None = None
    project_details: str | None = None

    def as_columns(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ExtractionResult:
    fields: ExtractedFields
    mapping_version: int
    unmapped_keys: list[str] = field(default_factory=list)


def get_mapping(version: int = CURRENT_MAPPING_VERSION) -> tuple[FieldSpec, ...]:
    try:
        return FIELD_MAPPINGS[version]
    except KeyError:
        raise TransformError(f"Unknown field mapping version: {version}") from None


def _type_label(kind: type) -> str:
    return "integer" if kind is int else "string"


def describe_mapping(version: int = CURRENT_MAPPING_VERSION) -> dict[str, dict[str, str]]:
    return {
        spec.key: {"column": spec.column, "type": _type_label(spec.kind)}
        for spec in get_mapping(version)
    }


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ", ".join(_to_text(item) for item in value if item is not None)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _parse_int(key: str, value: Any) -> int:
    # bool is an int subclass, but true/false is never a count
    if isinstance(value, bool):
        raise TransformError(f"Field '{key}' expects an integer, got boolean {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise TransformError(f"Field '{key}' expects an integer, got {value!r}")
    if isinstance(value, str):
        # plain ASCII digits only: no "1_0", no non-Latin numerals
        text = value.strip()
        if not _INTEGER_TEXT.fullmatch(text):
            raise TransformError(f"Field '{key}' expects an integer, got {value!r}")
        if len(text.lstrip("+-")) > len(str(INT_MAX)):
            raise TransformError(f"Field '{key}' is out of range: {text[:20]}...")
        return int(text)
    raise TransformError(
        f"Field '{key}' expects an integer, got {type(value).__name__}"
    )


def _to_int(key: str, value: Any) -> int:
    number = _parse_int(key, value)
    if not INT_MIN <= number <= INT_MAX:
        raise TransformError(
            f"Field '{key}' is out of range: {number} (allowed {INT_MIN}..{INT_MAX})"
        )
    return number


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    if value is None:
        return None
    if spec.kind is int:
        return _to_int(spec.key, value)
    text = _to_text(value)
    if spec.max_length is not None and len(text) > spec.max_length:
        raise TransformError(
            f"Field '{spec.key}' is too long: {len(text)} characters (max {spec.max_length})"
        )
    return text


def _apply_document(
    target: ExtractedFields,
    document: Any,
    mapping: tuple[FieldSpec, ...],
    unmapped: set[str],
) -> None:
    if not isinstance(document, dict):
        raise TransformError(
            f"Draft document must be a JSON object, got {type(document).__name__}"
        )

    known = {spec.key for spec in mapping}
    unmapped.update(key for key in document if key not in known)

    for spec in mapping:
        if spec.key in document:
            setattr(target, spec.column, coerce_value(spec, document[spec.key]))


def merge_documents(
    documents: Iterable[Any],
    version: int = CURRENT_MAPPING_VERSION,
) -> ExtractionResult:
    """
    Fold draft documents into one record, in the order given.

    A key present in a later document replaces the value taken from an
    earlier one (an explicit JSON null included). Keys absent from every
    document stay None. Keys the mapping does not know are collected in
    ``unmapped_keys`` rather than dropped silently.
    """
    mapping = get_mapping(version)
    fields = ExtractedFields()
    unmapped: set[str] = set()

    for document in documents:
        _apply_document(fields, document, mapping, unmapped)

    return ExtractionResult(
        fields=fields,
        mapping_version=version,
        unmapped_keys=sorted(unmapped),
    )


def extract_fields(
    document: Any,
    version: int = CURRENT_MAPPING_VERSION,
) -> ExtractionResult:
    return merge_documents([document], version=version)
