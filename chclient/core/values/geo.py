"""chclient Geometry Values - Multi-polygon payload and its typed value.

A multi-polygon is an ordered sequence of polygons, each an ordered sequence of
rings, each an ordered sequence of ``(x, y)`` points. The payload keeps all
coordinates in one flat buffer and records where rings and polygons end, so
copying, comparing and bounds checking never walk nested lists.
"""

import itertools
import numbers
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Type

from ..exceptions import InvalidPointError, ValueConversionError
from ..types import NestedMultiPolygon
from .object_value import ObjectValue
from .sources import CursorSource, SameKindSource, SequenceSource

_MISSING = object()


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _has_nested_shape(value: Any, depth: int) -> bool:
    """Check value is nested list/tuple sequences ``depth`` levels deep."""
    if not _is_sequence(value):
        return False
    if depth == 1:
        return True
    return all(_has_nested_shape(element, depth - 1) for element in value)


def _is_nested_multi_polygon(value: Any) -> bool:
    """Check value is empty, or four levels deep with at least one point present."""
    if not _has_nested_shape(value, 4):
        return False
    return not value or any(True for polygon in value for ring in polygon for _ in ring)


def to_coordinate(value: Any) -> float:
    """Coerce one coordinate to float.

    Numbers are used directly, anything else is parsed from its string form.

    Raises:
        ValueConversionError: If value is not numeric text
    """
    if isinstance(value, numbers.Number) and not isinstance(value, complex):
        return float(value)
    try:
        return float(str(value))
    except (TypeError, ValueError) as e:
        raise ValueConversionError(
            source=type(value).__name__,
            target="Float",
            reason=f"Cannot parse {value!r} as a coordinate",
            value=value,
            cause=e,
        ) from e


def _check_boundaries(ends: Sequence[int], total: int, level: str) -> None:
    previous = 0
    for end in ends:
        if not isinstance(end, int) or end < previous or end > total:
            raise ValueConversionError(
                target="MultiPolygon",
                reason=f"Inconsistent {level} boundaries {list(ends)!r} for {total} entries",
            )
        previous = end
    if (ends[-1] if ends else 0) != total:
        raise ValueConversionError(
            target="MultiPolygon",
            reason=f"{level.capitalize()} boundaries {list(ends)!r} do not cover {total} entries",
        )


class MultiPolygon:
    """Multi-polygon stored as a flat coordinate buffer plus boundary lists.

    ``ring_ends[k]`` is the exclusive end point index of ring ``k`` and
    ``polygon_ends[p]`` the exclusive end ring index of polygon ``p``. Empty
    rings and polygons are allowed; an empty multi-polygon has no polygons.
    """

    __slots__ = ("_coordinates", "_ring_ends", "_polygon_ends")

    def __init__(
        self,
        coordinates: Sequence[float] = (),
        ring_ends: Sequence[int] = (),
        polygon_ends: Sequence[int] = ()
    ):
        coordinates = [to_coordinate(c) for c in coordinates]
        if len(coordinates) % 2:
            raise InvalidPointError(coordinates[-1:])
        ring_ends = list(ring_ends)
        polygon_ends = list(polygon_ends)
        _check_boundaries(ring_ends, len(coordinates) // 2, "ring")
        _check_boundaries(polygon_ends, len(ring_ends), "polygon")

        self._coordinates = coordinates
        self._ring_ends = ring_ends
        self._polygon_ends = polygon_ends

    @classmethod
    def empty(cls) -> "MultiPolygon":
        """Multi-polygon without polygons, the null surrogate of the type."""
        return cls()

    @classmethod
    def point_of(cls, x: Any, y: Any) -> "MultiPolygon":
        """One polygon with one ring holding the single point ``(x, y)``."""
        return cls((to_coordinate(x), to_coordinate(y)), (1,), (1,))

    @classmethod
    def from_nested(cls, nested: Any) -> "MultiPolygon":
        """Build from polygon -> ring -> point -> (x, y) nested sequences.

        Raises:
            InvalidPointError: If a point does not have exactly two coordinates
            ValueConversionError: If a level is not a sequence or a coordinate
                is not numeric
        """
        if isinstance(nested, MultiPolygon):
            return nested.copy()

        coordinates: List[float] = []
        ring_ends: List[int] = []
        polygon_ends: List[int] = []

        for polygon in cls._level(nested, "multi-polygon"):
            for ring in cls._level(polygon, "polygon"):
                for point in cls._level(ring, "ring"):
                    if not _is_sequence(point) or len(point) != 2:
                        raise InvalidPointError(point)
                    coordinates.append(to_coordinate(point[0]))
                    coordinates.append(to_coordinate(point[1]))
                ring_ends.append(len(coordinates) // 2)
            polygon_ends.append(len(ring_ends))

        instance = cls.__new__(cls)
        instance._coordinates = coordinates
        instance._ring_ends = ring_ends
        instance._polygon_ends = polygon_ends
        return instance

    @staticmethod
    def _level(value: Any, level: str) -> Sequence[Any]:
        if not _is_sequence(value):
            raise ValueConversionError(
                source=type(value).__name__,
                target="MultiPolygon",
                reason=f"Expected a sequence at {level} level, got {value!r}",
                value=value,
            )
        return value

    def to_nested(self) -> NestedMultiPolygon:
        """Fresh nested lists, points as ``[x, y]``."""
        return [
            [
                [
                    [self._coordinates[2 * i], self._coordinates[2 * i + 1]]
                    for i in range(*self._ring_span(r))
                ]
                for r in range(*self._polygon_span(p))
            ]
            for p in range(len(self._polygon_ends))
        ]

    def _polygon_span(self, polygon: int) -> Tuple[int, int]:
        start = self._polygon_ends[polygon - 1] if polygon > 0 else 0
        return start, self._polygon_ends[polygon]

    def _ring_span(self, ring: int) -> Tuple[int, int]:
        start = self._ring_ends[ring - 1] if ring > 0 else 0
        return start, self._ring_ends[ring]

    def _point_index(self, polygon: int, ring: int, index: int) -> int:
        if not 0 <= polygon < len(self._polygon_ends):
            raise IndexError(f"Polygon index {polygon} out of range")
        first_ring, end_ring = self._polygon_span(polygon)
        if not 0 <= ring < end_ring - first_ring:
            raise IndexError(f"Ring index {ring} out of range for polygon {polygon}")
        first_point, end_point = self._ring_span(first_ring + ring)
        if not 0 <= index < end_point - first_point:
            raise IndexError(f"Point index {index} out of range for ring {ring}")
        return first_point + index

    @property
    def polygon_count(self) -> int:
        return len(self._polygon_ends)

    @property
    def ring_count(self) -> int:
        return len(self._ring_ends)

    @property
    def point_count(self) -> int:
        return len(self._coordinates) // 2

    @property
    def coordinates(self) -> Tuple[float, ...]:
        return tuple(self._coordinates)

    @property
    def ring_ends(self) -> Tuple[int, ...]:
        return tuple(self._ring_ends)

    @property
    def polygon_ends(self) -> Tuple[int, ...]:
        return tuple(self._polygon_ends)

    def point(self, polygon: int, ring: int, index: int) -> Tuple[float, float]:
        """Coordinates of one point addressed by polygon, ring and position."""
        i = self._point_index(polygon, ring, index)
        return self._coordinates[2 * i], self._coordinates[2 * i + 1]

    def set_point(self, polygon: int, ring: int, index: int, x: Any, y: Any) -> None:
        """Overwrite one point in place."""
        i = self._point_index(polygon, ring, index)
        x, y = to_coordinate(x), to_coordinate(y)
        self._coordinates[2 * i] = x
        self._coordinates[2 * i + 1] = y

    def copy(self) -> "MultiPolygon":
        """Independent copy sharing no buffers with this instance."""
        instance = type(self).__new__(type(self))
        instance._coordinates = list(self._coordinates)
        instance._ring_ends = list(self._ring_ends)
        instance._polygon_ends = list(self._polygon_ends)
        return instance

    def __len__(self) -> int:
        return self.polygon_count

    def __iter__(self) -> Iterator[List[List[List[float]]]]:
        return iter(self.to_nested())

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, MultiPolygon):
            return NotImplemented
        return (
            self._polygon_ends == other._polygon_ends
            and self._ring_ends == other._ring_ends
            and self._coordinates == other._coordinates
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"MultiPolygon(polygons={self.polygon_count}, rings={self.ring_count}, "
            f"points={self.point_count})"
        )


def _format_multi_polygon(value: MultiPolygon) -> str:
    return "[" + ",".join(
        "[" + ",".join(
            "[" + ",".join(f"({x!r},{y!r})" for x, y in ring) + "]"
            for ring in polygon
        ) + "]"
        for polygon in value
    ) + "]"


class MultiPolygonValue(ObjectValue[MultiPolygon]):
    """Typed value holding a multi-polygon.

    The payload is never None. Database NULL maps to the empty multi-polygon,
    so ``is_nullable()`` is always False.
    """

    TYPE_NAME = "MultiPolygon"

    def __init__(self, value: Any = None):
        super().__init__(MultiPolygon.empty() if value is None else value)

    @classmethod
    def of_empty(cls) -> "MultiPolygonValue":
        return cls()

    @classmethod
    def of(cls, value: Any, ref: Optional[Any] = None) -> "MultiPolygonValue":
        """Wrap value, updating ``ref`` in place when it is a MultiPolygonValue."""
        target = ref if isinstance(ref, MultiPolygonValue) else cls()
        target.update(value)
        return target

    def _check(self, value: Any) -> MultiPolygon:
        if isinstance(value, MultiPolygon):
            return value
        if _is_sequence(value):
            return MultiPolygon.from_nested(value)
        raise ValueConversionError(
            source=type(value).__name__,
            target=self.TYPE_NAME,
            reason="Payload must be a MultiPolygon or nested coordinate sequences",
            value=value,
        )

    def _is_native(self, value: Any) -> bool:
        return isinstance(value, MultiPolygon) or _is_nested_multi_polygon(value)

    def copy(self, deep: bool = False) -> "MultiPolygonValue":
        """Copy this value; a shallow copy shares the payload."""
        return type(self)(self._value.copy() if deep else self._value)

    def as_array(self, element_type: Optional[Type] = None) -> List[Any]:
        """Polygons as nested lists, or nested tuples when asked for tuple."""
        nested = self._value.to_nested()
        if element_type is None or element_type is list or element_type is object:
            return nested
        if element_type is tuple:
            return [
                tuple(tuple(tuple(point) for point in ring) for ring in polygon)
                for polygon in nested
            ]
        raise ValueConversionError(
            source=self.TYPE_NAME,
            target=getattr(element_type, "__name__", str(element_type)),
            reason="Polygons can only be projected as list or tuple",
        )

    def as_map(self, key_type: Type, value_type: Type) -> dict:
        """Polygons keyed by their 1-based position."""
        if key_type is None or value_type is None:
            raise ValueError("Non-null key and value types are required")
        return {
            key_type(i): polygon
            for i, polygon in enumerate(self.as_array(value_type), start=1)
        }

    def as_string(self) -> str:
        return _format_multi_polygon(self._value)

    def is_nullable(self) -> bool:
        return False

    def is_null_or_empty(self) -> bool:
        return self._value.polygon_count == 0

    def reset_to_default(self) -> "MultiPolygonValue":
        self._value = MultiPolygon.empty()
        return self

    def reset_to_null_or_empty(self) -> "MultiPolygonValue":
        return self.reset_to_default()

    def to_sql_expression(self) -> str:
        return self.as_string()

    def _update_from_sequence(self, source: SequenceSource) -> None:
        if len(source.elements) != 2:
            raise InvalidPointError(source.value, self.TYPE_NAME)
        self.set(MultiPolygon.point_of(*source.elements))

    def _update_from_cursor(self, source: CursorSource) -> None:
        elements = list(itertools.islice(source.value, 2))
        if len(elements) != 2:
            raise InvalidPointError(elements, self.TYPE_NAME)
        extra = next(source.value, _MISSING)
        if extra is not _MISSING:
            raise InvalidPointError(elements + [extra], self.TYPE_NAME)
        self.set(MultiPolygon.point_of(*elements))

    def _update_from_same_kind(self, source: SameKindSource) -> None:
        # Two values never share one mutable payload
        self.set(source.value.value.copy())


class _Parser:
    """Recursive-descent parser for ``[[[(x,y),...],...],...]`` text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, expected: str) -> ValueConversionError:
        found = self.text[self.pos] if self.pos < len(self.text) else "end of input"
        return ValueConversionError(
            source="String",
            target="MultiPolygon",
            reason=f"Expected {expected} at position {self.pos}, found {found!r}",
            value=self.text,
        )

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        self.skip_whitespace()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.error(repr(char))
        self.pos += 1

    def parse_list(self, parse_item) -> List[Any]:
        self.expect("[")
        items = []
        if self.peek() == "]":
            self.pos += 1
            return items
        while True:
            items.append(parse_item())
            if self.peek() == ",":
                self.pos += 1
                continue
            self.expect("]")
            return items

    def parse_number(self) -> float:
        self.skip_whitespace()
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in ",)":
            self.pos += 1
        token = self.text[start:self.pos].strip()
        try:
            return float(token)
        except ValueError:
            self.pos = start
            raise self.error("a number") from None

    def parse_point(self) -> List[float]:
        self.expect("(")
        x = self.parse_number()
        self.expect(",")
        y = self.parse_number()
        self.expect(")")
        return [x, y]

    def parse_ring(self) -> List[List[float]]:
        return self.parse_list(self.parse_point)

    def parse_polygon(self) -> List[List[List[float]]]:
        return self.parse_list(self.parse_ring)

    def parse(self) -> MultiPolygon:
        nested = self.parse_list(self.parse_polygon)
        if self.peek():
            raise self.error("end of input")
        return MultiPolygon.from_nested(nested)


def parse_multi_polygon(text: str) -> MultiPolygon:
    """Parse the textual form produced by ``MultiPolygonValue.as_string``.

    Raises:
        ValueConversionError: If text is not a well-formed multi-polygon
    """
    return _Parser(text).parse()
