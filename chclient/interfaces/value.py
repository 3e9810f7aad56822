"""TypedValue protocol for chclient - contract every value kind must satisfy."""

from typing import Any, Dict, List, Optional, Protocol, Type, runtime_checkable


@runtime_checkable
class TypedValue(Protocol):
    """Abstract protocol for mutable, strongly-typed value holders.

    A typed value holds exactly one payload of a fixed semantic type. It is
    updated in place while decoding rows, so it is owned by a single reader or
    writer at a time; use ``copy(deep=True)`` before handing it to another
    owner.
    """

    @property
    def value(self) -> Any:
        """Current payload."""
        ...

    def copy(self, deep: bool = False) -> "TypedValue":
        """Create a new value, aliasing the payload unless deep is True."""
        ...

    def as_array(self, element_type: Optional[Type] = None) -> List[Any]:
        """Project the payload to a list, optionally casting each element."""
        ...

    def as_map(self, key_type: Type, value_type: Type) -> Dict[Any, Any]:
        """Project the payload to a dict."""
        ...

    def as_object(self) -> Any:
        """Project the payload to a generic object."""
        ...

    def as_string(self) -> str:
        """Project the payload to text."""
        ...

    def is_nullable(self) -> bool:
        """Check if the value kind has a null state."""
        ...

    def is_null_or_empty(self) -> bool:
        """Check if the value is null, or empty for kinds without null."""
        ...

    def reset_to_default(self) -> "TypedValue":
        """Reset payload to the default of the value kind."""
        ...

    def reset_to_null_or_empty(self) -> "TypedValue":
        """Reset payload to null, or empty for kinds without null."""
        ...

    def to_sql_expression(self) -> str:
        """Render payload as a SQL literal."""
        ...

    def update(self, value: Any) -> "TypedValue":
        """Absorb a value of any supported source representation."""
        ...
