"""Base class for typed values holding an object payload."""

from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from ..exceptions import UnsupportedConversionError, ValueConversionError
from .sources import (
    CursorSource,
    EmptyValueSource,
    NativeSource,
    OtherValueSource,
    SameKindSource,
    ScalarSource,
    SequenceSource,
    UpdateSource,
    classify_update_source,
)

T = TypeVar("T")


class ObjectValue(Generic[T]):
    """Mutable holder of exactly one payload of a fixed semantic type.

    ``update`` classifies its input into an UpdateSource variant and calls the
    handler registered for that variant in ``_UPDATE_HANDLERS``. Subclasses
    override handlers, they never add branches to ``update``. Handlers must
    validate fully before calling ``set`` so a failed update leaves the
    payload untouched.

    Instances are not thread-safe; they are reused across decode cycles by a
    single owner.
    """

    TYPE_NAME: ClassVar[str] = "Object"

    _UPDATE_HANDLERS: ClassVar[Dict[Type[UpdateSource], str]] = {
        ScalarSource: "_update_from_scalar",
        SequenceSource: "_update_from_sequence",
        CursorSource: "_update_from_cursor",
        SameKindSource: "_update_from_same_kind",
        EmptyValueSource: "_update_from_empty",
        OtherValueSource: "_update_from_other_value",
        NativeSource: "_update_from_native",
    }

    def __init__(self, value: T):
        self._value: T = self._check(value)

    @property
    def value(self) -> T:
        """Current payload."""
        return self._value

    def _check(self, value: Any) -> T:
        """Validate and normalize a payload. Override in subclasses."""
        if value is None:
            raise ValueConversionError(target=self.TYPE_NAME, reason="Payload cannot be None")
        return value

    def _is_native(self, value: Any) -> bool:
        """Whether value already is a native payload. Override in subclasses."""
        return False

    def set(self, value: Any) -> "ObjectValue[T]":
        """Replace the payload after validation.

        Returns:
            This value, for chaining
        """
        self._value = self._check(value)
        return self

    def copy(self, deep: bool = False) -> "ObjectValue[T]":
        return type(self)(self._value)

    def as_array(self, element_type: Optional[Type] = None) -> List[Any]:
        return [self.as_object()]

    def as_map(self, key_type: Type, value_type: Type) -> Dict[Any, Any]:
        raise UnsupportedConversionError(self.TYPE_NAME, "Map")

    def as_object(self) -> Any:
        return self._value

    def as_string(self) -> str:
        return str(self._value)

    def is_nullable(self) -> bool:
        return True

    def is_null_or_empty(self) -> bool:
        return self._value is None

    def reset_to_default(self) -> "ObjectValue[T]":
        raise NotImplementedError

    def reset_to_null_or_empty(self) -> "ObjectValue[T]":
        return self.reset_to_default()

    def to_sql_expression(self) -> str:
        return self.as_string()

    def update(self, value: Any) -> "ObjectValue[T]":
        """Absorb a value of any supported source representation.

        Args:
            value: Scalar, array, collection, iterator, mapping, typed value
                or native payload

        Returns:
            This value, for chaining

        Raises:
            UnsupportedConversionError: If the source kind cannot represent this kind
            ValueConversionError: If the source is malformed
        """
        source = classify_update_source(value, type(self), self._is_native)
        handler = getattr(self, self._UPDATE_HANDLERS[type(source)])
        handler(source)
        return self

    def _update_from_scalar(self, source: ScalarSource) -> None:
        raise UnsupportedConversionError(source.kind, self.TYPE_NAME, source.value)

    def _update_from_sequence(self, source: SequenceSource) -> None:
        raise UnsupportedConversionError(source.kind, self.TYPE_NAME, source.value)

    def _update_from_cursor(self, source: CursorSource) -> None:
        raise UnsupportedConversionError("Iterator", self.TYPE_NAME, source.value)

    def _update_from_same_kind(self, source: SameKindSource) -> None:
        self.set(source.value.value)

    def _update_from_empty(self, source: EmptyValueSource) -> None:
        self.reset_to_null_or_empty()

    def _update_from_other_value(self, source: OtherValueSource) -> None:
        self.update(source.value.as_array())

    def _update_from_native(self, source: NativeSource) -> None:
        self.set(source.value)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self._value == other._value

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}[{self.as_string()}]"
