"""Dictionary helpers used across dotkit."""

from __future__ import annotations

from collections.abc import Mapping

__all__ = ["deep_merge", "strip_none"]


def deep_merge(base: Mapping[str, object], override: Mapping[str, object]) -> dict[str, object]:
    """Recursively merge two mappings, giving precedence to override.

    Nested mappings are merged key by key. Any other value, lists included,
    is replaced wholesale by the override. ``None`` in the override never
    clears a base value.
    """
    result: dict[str, object] = dict(base)

    for key, override_value in override.items():
        if override_value is None:
            continue

        existing_value = result.get(key)

        if isinstance(existing_value, Mapping) and isinstance(override_value, Mapping):
            result[key] = deep_merge(dict(existing_value), dict(override_value))
        elif isinstance(override_value, list):
            result[key] = list(override_value)
        else:
            result[key] = override_value

    return result


def strip_none(data: Mapping[str, object]) -> dict[str, object]:
    cleaned: dict[str, object] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            cleaned[key] = strip_none(dict(value))
        else:
            cleaned[key] = value
    return cleaned
