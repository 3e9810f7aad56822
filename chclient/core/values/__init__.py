"""chclient Typed Values Package - Mutable single-owner value containers.

Every value kind follows the TypedValue contract: it absorbs updates from
scalars, sequences, cursors and other typed values, and projects its payload
as arrays, maps and SQL text. Updates are classified into one update source
variant and dispatched through a single table per value class.
"""

from .geo import MultiPolygon, MultiPolygonValue, parse_multi_polygon, to_coordinate
from .object_value import ObjectValue
from .sources import (
    UPDATE_SOURCE_VARIANTS,
    CursorSource,
    EmptyValueSource,
    NativeSource,
    OtherValueSource,
    SameKindSource,
    ScalarSource,
    SequenceSource,
    UpdateSource,
    classify_update_source,
    is_typed_value,
    scalar_kind,
)

__all__ = [
    # Base
    "ObjectValue",

    # Geometry
    "MultiPolygon",
    "MultiPolygonValue",
    "parse_multi_polygon",
    "to_coordinate",

    # Update sources
    "UpdateSource",
    "ScalarSource",
    "SequenceSource",
    "CursorSource",
    "SameKindSource",
    "EmptyValueSource",
    "OtherValueSource",
    "NativeSource",
    "UPDATE_SOURCE_VARIANTS",
    "classify_update_source",
    "is_typed_value",
    "scalar_kind",
]
