"""chclient Update Sources - Tagged variants of values a typed value can absorb.

``classify_update_source`` turns any input of ``update`` into exactly one
variant. Typed values dispatch on the variant class through a single table, so
supporting a new kind of input means adding a variant here, not another
branch in every value kind.
"""

import ipaddress
import numbers
import uuid
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Type

# Order matters: bool before int, datetime before date
_SCALAR_KINDS: Tuple[Tuple[type, str], ...] = (
    (bool, "Boolean"),
    (Enum, "Enum"),
    (int, "Integer"),
    (float, "Float"),
    (Decimal, "BigDecimal"),
    (numbers.Number, "Number"),
    (str, "String"),
    (uuid.UUID, "UUID"),
    (datetime, "DateTime"),
    (date, "Date"),
    (time, "Time"),
    (timedelta, "Interval"),
    (ipaddress.IPv4Address, "IPv4"),
    (ipaddress.IPv6Address, "IPv6"),
)


@dataclass(frozen=True)
class UpdateSource:
    """Base of all update source variants."""

    value: Any


@dataclass(frozen=True)
class ScalarSource(UpdateSource):
    """A single atomic value (number, text, temporal, UUID, enum ...)."""

    kind: str


@dataclass(frozen=True)
class SequenceSource(UpdateSource):
    """A fixed-size array, collection or mapping, materialized as its elements.

    Mappings contribute their values in iteration order.
    """

    elements: Tuple[Any, ...]
    kind: str


@dataclass(frozen=True)
class CursorSource(UpdateSource):
    """A forward-only iterator; elements are consumed on demand."""


@dataclass(frozen=True)
class SameKindSource(UpdateSource):
    """A non-empty typed value of the same concrete kind."""


@dataclass(frozen=True)
class EmptyValueSource(UpdateSource):
    """None, or a typed value of any kind that is null or empty."""


@dataclass(frozen=True)
class OtherValueSource(UpdateSource):
    """A non-empty typed value of another kind."""


@dataclass(frozen=True)
class NativeSource(UpdateSource):
    """A payload already in the native representation of the target kind."""


UPDATE_SOURCE_VARIANTS: Tuple[Type[UpdateSource], ...] = (
    ScalarSource,
    SequenceSource,
    CursorSource,
    SameKindSource,
    EmptyValueSource,
    OtherValueSource,
    NativeSource,
)


def is_typed_value(value: Any) -> bool:
    """Check whether value follows the TypedValue contract."""
    return (
        callable(getattr(value, "is_null_or_empty", None))
        and callable(getattr(value, "as_array", None))
        and callable(getattr(value, "update", None))
    )


def scalar_kind(value: Any) -> Optional[str]:
    """Kind name of an atomic value, None if value is not atomic."""
    for scalar_type, kind in _SCALAR_KINDS:
        if isinstance(value, scalar_type):
            return kind
    return None


def _sequence_kind(value: Any) -> str:
    if isinstance(value, Mapping):
        return "Map"
    if isinstance(value, (list, tuple)):
        return "Array"
    if isinstance(value, (bytes, bytearray)):
        return "Byte[]"
    return type(value).__name__


def classify_update_source(
    value: Any,
    value_class: type,
    is_native: Optional[Callable[[Any], bool]] = None
) -> UpdateSource:
    """Classify an input of ``update`` into one update source variant.

    Args:
        value: Input to classify
        value_class: Concrete class of the typed value being updated
        is_native: Predicate telling whether value is already a native payload

    Returns:
        Exactly one UpdateSource variant
    """
    if value is None:
        return EmptyValueSource(value)

    if is_typed_value(value):
        if value.is_null_or_empty():
            return EmptyValueSource(value)
        if type(value) is value_class:
            return SameKindSource(value)
        return OtherValueSource(value)

    if is_native is not None and is_native(value):
        return NativeSource(value)

    kind = scalar_kind(value)
    if kind is not None:
        return ScalarSource(value, kind)

    if isinstance(value, Mapping):
        return SequenceSource(value, tuple(value.values()), _sequence_kind(value))

    if isinstance(value, Iterator):
        return CursorSource(value)

    if isinstance(value, Iterable):
        return SequenceSource(value, tuple(value), _sequence_kind(value))

    return ScalarSource(value, type(value).__name__)
