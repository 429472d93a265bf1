"""
Inbound request adapter.

Maps the legacy Portuguese field names onto the canonical ones before a
payload reaches the calculator.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

CANONICAL_FIELDS = ("startDate", "businessDays")

LEGACY_FIELD_ALIASES = {
    "dataInicial": "startDate",
    "diasUteis": "businessDays",
}


class MissingFieldsError(ValueError):
    """Raised when required inbound fields are absent."""

    def __init__(self, missing: Tuple[str, ...]):
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


def remap_legacy_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rename legacy fields to their canonical names.

    Canonical fields already present win over their legacy aliases. Unknown
    fields are dropped.

    Args:
        payload: Decoded request body.

    Returns:
        Dictionary with only canonical field names.
    """
    result: Dict[str, Any] = {}
    for legacy, canonical in LEGACY_FIELD_ALIASES.items():
        if legacy in payload:
            result[canonical] = payload[legacy]
    for canonical in CANONICAL_FIELDS:
        if canonical in payload:
            result[canonical] = payload[canonical]
    return result


def extract_inputs(payload: Optional[Mapping[str, Any]], legacy: bool = False) -> Tuple[Any, Any]:
    """
    Pull the start date and business day count out of a request body.

    Values are returned as received; the calculator validates them.

    Args:
        payload: Decoded request body.
        legacy: Whether the payload uses the legacy field names.

    Returns:
        Tuple of (startDate, businessDays).

    Raises:
        MissingFieldsError: If either field is missing or empty.
    """
    if not isinstance(payload, Mapping):
        payload = {}
    fields = remap_legacy_fields(payload) if legacy else dict(payload)

    missing = tuple(
        name for name in CANONICAL_FIELDS if fields.get(name) in (None, "")
    )
    if missing:
        raise MissingFieldsError(missing)

    return fields["startDate"], fields["businessDays"]
