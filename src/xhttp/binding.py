# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Codec bindings that decode a response payload into a caller-supplied destination.

A binding is stateless: ``bind(data, obj)`` parses ``data`` and populates ``obj``
in place, raising DecodeError when the payload is malformed or does not fit the
destination. Supported destinations:

- a mutable mapping (updated with the decoded keys)
- a mutable sequence (replaced by the decoded list)
- any object with attributes, e.g. a dataclass instance (existing attributes
  are assigned; unknown keys are ignored)
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import MutableMapping, MutableSequence
from typing import Any, Protocol
from urllib.parse import parse_qs

from .errors import DecodeError


class Binding(Protocol):
    """A named codec capability."""

    name: str

    def bind(self, data: bytes, obj: Any) -> None: ...


def _coerce(value: Any, current: Any, binding: str) -> Any:
    """Convert text values to the type of the attribute they replace."""
    if not isinstance(value, str) or current is None or isinstance(current, str):
        return value
    try:
        if isinstance(current, bool):
            lowered = value.strip().lower()
            if lowered in {"1", "true", "yes", "on"}:
                return True
            if lowered in {"0", "false", "no", "off", ""}:
                return False
            raise ValueError(value)
        if isinstance(current, int):
            return int(value)
        if isinstance(current, float):
            return float(value)
    except ValueError as exc:
        raise DecodeError(f"cannot convert {value!r} to {type(current).__name__}", binding) from exc
    return value


def _check_type(name: str, value: Any, current: Any, binding: str) -> None:
    """Reject a decoded scalar whose JSON type differs from the attribute it replaces."""
    if current is None or not isinstance(current, (str, int, float, bool)):
        return
    if isinstance(current, bool):
        fits = isinstance(value, bool)
    elif isinstance(current, int):
        fits = isinstance(value, int) and not isinstance(value, bool)
    elif isinstance(current, float):
        fits = isinstance(value, (int, float)) and not isinstance(value, bool)
    else:
        fits = isinstance(value, str)
    if not fits:
        raise DecodeError(f"cannot decode {type(value).__name__} into {name!r} ({type(current).__name__})", binding)


def populate(obj: Any, value: Any, binding: str, *, coerce: bool = False, strict: bool = False) -> None:
    """Copy a decoded value into ``obj`` according to the destination's shape."""
    if isinstance(obj, MutableMapping):
        if not isinstance(value, dict):
            raise DecodeError(f"cannot decode {type(value).__name__} into a mapping", binding)
        obj.update(value)
        return
    if isinstance(obj, MutableSequence):
        if not isinstance(value, list):
            raise DecodeError(f"cannot decode {type(value).__name__} into a sequence", binding)
        obj[:] = value
        return
    if obj is None or isinstance(obj, (str, bytes, int, float, bool, tuple, frozenset)):
        raise DecodeError(f"destination {type(obj).__name__} is not writable", binding)
    if not isinstance(value, dict):
        raise DecodeError(f"cannot decode {type(value).__name__} into {type(obj).__name__}", binding)
    for key, item in value.items():
        name = str(key)
        if not hasattr(obj, name):
            continue
        current = getattr(obj, name)
        if coerce:
            item = _coerce(item, current, binding)
        elif strict:
            _check_type(name, item, current, binding)
        try:
            setattr(obj, name, item)
        except AttributeError as exc:
            raise DecodeError(f"cannot set attribute {name!r}", binding) from exc


class JSONBinding:
    name = "json"

    def bind(self, data: bytes, obj: Any) -> None:
        try:
            value = json.loads(data)
        except (ValueError, TypeError) as exc:
            raise DecodeError(str(exc), self.name) from exc
        populate(obj, value, self.name, strict=True)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_value(element: ET.Element) -> Any:
    children = list(element)
    if not children and not element.attrib:
        return (element.text or "").strip()
    value: dict[str, Any] = {_local_name(k): v for k, v in element.attrib.items()}
    for child in children:
        key = _local_name(child.tag)
        item = _element_value(child)
        if key in value:
            existing = value[key]
            if isinstance(existing, list):
                existing.append(item)
            else:
                value[key] = [existing, item]
        else:
            value[key] = item
    return value


class XMLBinding:
    name = "xml"

    def bind(self, data: bytes, obj: Any) -> None:
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise DecodeError(str(exc), self.name) from exc
        value = _element_value(root)
        if isinstance(obj, MutableSequence):
            value = [_element_value(child) for child in root]
        elif not isinstance(value, dict):
            raise DecodeError(f"root element <{_local_name(root.tag)}> has no fields", self.name)
        populate(obj, value, self.name, coerce=True)


class FormBinding:
    name = "form"

    def bind(self, data: bytes, obj: Any) -> None:
        try:
            parsed = parse_qs(data.decode("utf-8"), keep_blank_values=True, strict_parsing=bool(data))
        except (UnicodeDecodeError, ValueError) as exc:
            raise DecodeError(str(exc), self.name) from exc
        value = {key: items[0] if len(items) == 1 else items for key, items in parsed.items()}
        populate(obj, value, self.name, coerce=True)


JSON = JSONBinding()
XML = XMLBinding()
FORM = FormBinding()


__all__ = ["FORM", "JSON", "XML", "Binding", "FormBinding", "JSONBinding", "XMLBinding", "populate"]
