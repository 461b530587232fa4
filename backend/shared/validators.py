"""Shared validation helpers for settings sources."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def parse_string_list(value: str | list[str], *, allow_empty: bool = False) -> list[str]:
    """Parse a string list from environment variable or config value.

    Accepts:
    - A list of strings (returned as-is)
    - A JSON array string: '["left","across"]'
    - A comma-separated string: 'left,across'

    Raises ValueError for empty string values or malformed JSON.
    When allow_empty is False (default), also rejects empty lists.
    """
    if isinstance(value, list):
        items = value
    else:
        stripped = value.strip()
        if not stripped:
            raise ValueError("String list value must not be empty")
        items = _parse_json_list(stripped) if stripped.startswith("[") else stripped.split(",")

    result = [item.strip() for item in items if item.strip()]
    if not allow_empty and not result:
        raise ValueError("String list value must not be empty")
    return result


def _parse_json_list(raw: str) -> list[str]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON array: {e}") from e
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ValueError("JSON value must be an array of strings")
    return parsed


class StringListEnvSettingsSource(EnvSettingsSource):
    """Env settings source that passes string-list fields as raw strings to validators.

    pydantic-settings tries to JSON-decode list-typed fields from env vars before
    validators run. This subclass bypasses that for the fields named in
    string_list_fields so parse_string_list handles both JSON and CSV formats.
    """

    string_list_fields: ClassVar[frozenset[str]] = frozenset({"chii_sources"})

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in self.string_list_fields and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
