"""Helpers for the cart snapshot documents embedded in Checkout and Order."""

from typing import Any

IDENTIFIER_KEYS = ("id", "tariff", "category")


def stringify_identifiers(document: Any, keys: tuple[str, ...] = IDENTIFIER_KEYS) -> Any:
    """Return a copy of ``document`` with identifier values cast to ``str``.

    Only scalar values under ``keys`` are cast; a nested ``tariff`` or
    ``category`` object is walked instead, so its own ``id`` is normalized.
    """
    if isinstance(document, dict):
        normalized = {}
        for key, value in document.items():
            if key in keys and value is not None and not isinstance(value, (dict, list)):
                normalized[key] = str(value)
            else:
                normalized[key] = stringify_identifiers(value, keys)
        return normalized
    if isinstance(document, list):
        return [stringify_identifiers(item, keys) for item in document]
    return document


def collapse_to_identifier(value: Any) -> Any:
    """``{"id": "t-1", "rates": {...}}`` becomes ``"t-1"``; bare identifiers pass through."""
    if isinstance(value, dict):
        return value.get("id")
    return value
