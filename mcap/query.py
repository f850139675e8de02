from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, List, Optional, Tuple, Type, TypeVar, get_type_hints
from urllib.parse import parse_qsl, urlencode

T = TypeVar("T")

_ZERO_VALUES = {int: 0, float: 0.0, str: "", bool: False}


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_default(value: Any) -> bool:
    # bool is a subclass of int; check it first.
    if isinstance(value, bool):
        return value is False
    for typ, zero in _ZERO_VALUES.items():
        if isinstance(value, typ):
            return value == zero
    return value is None


def query_values(config: Any) -> List[Tuple[str, str]]:
    """Return the query pairs for a request config, sorted by key.

    Fields marked ``omitempty`` are dropped when they hold their type's zero value.
    Negative numbers are never treated as zero values.
    """
    if config is None:
        return []
    if not is_dataclass(config):
        raise TypeError(f"query config must be a dataclass instance, got {type(config).__name__}")

    pairs: List[Tuple[str, str]] = []
    for f in fields(config):
        key = f.metadata.get("query")
        if not key:
            continue
        value = getattr(config, f.name)
        if f.metadata.get("omitempty") and _is_default(value):
            continue
        pairs.append((key, _render(value)))
    pairs.sort(key=lambda kv: kv[0])
    return pairs


def encode_query(config: Any) -> str:
    return urlencode(query_values(config))


def _coerce(raw: str, typ: Any) -> Any:
    if typ is bool:
        return raw.strip().lower() in ("1", "true", "yes", "y")
    if typ is int:
        return int(raw)
    if typ is float:
        return float(raw)
    return raw


def decode_query(query: str, config_cls: Type[T]) -> T:
    """Parse a query string back into ``config_cls``.

    Unknown keys are ignored; missing keys keep the dataclass default.
    """
    by_key = {}
    hints = get_type_hints(config_cls)
    for f in fields(config_cls):
        key = f.metadata.get("query")
        if key:
            by_key[key] = (f.name, hints.get(f.name, str))

    kwargs = {}
    for key, raw in parse_qsl(query, keep_blank_values=True):
        entry: Optional[Tuple[str, Any]] = by_key.get(key)
        if entry is None:
            continue
        name, typ = entry
        kwargs[name] = _coerce(raw, typ)
    return config_cls(**kwargs)
