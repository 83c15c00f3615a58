"""Typed contract for the JSON columns on catalog records.

Images and tags are lists of strings; specifications are a flat string map.
Writes go through the DRF fields below, which reject anything else. Reads go
through the `coerce_*` helpers, which accept legacy values (including JSON
encoded as text) and fall back to an empty list or empty dict when a stored
value is malformed, so a bad row never fails a request.
"""

import json

from rest_framework import serializers


def _decode(value):
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return value


def coerce_string_list(value) -> list[str]:
    """Return `value` as a list of strings, or [] when it cannot be read."""

    decoded = _decode(value)
    if not isinstance(decoded, list):
        return []
    return [item for item in decoded if isinstance(item, str)]


def coerce_string_map(value) -> dict[str, str]:
    """Return `value` as a dict of str -> str, or {} when it cannot be read."""

    decoded = _decode(value)
    if not isinstance(decoded, dict):
        return {}
    return {str(key): str(val) for key, val in decoded.items() if val is not None}


class StringListField(serializers.ListField):
    child = serializers.CharField(max_length=500)

    def to_representation(self, data):
        return coerce_string_list(data)


class StringMapField(serializers.DictField):
    child = serializers.CharField(max_length=500, allow_blank=True)

    def to_representation(self, value):
        return coerce_string_map(value)
