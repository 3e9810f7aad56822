"""Tests for classifying update sources."""

import ipaddress
from datetime import time, timedelta

import pytest

from chclient.core.values import (
    CursorSource,
    EmptyValueSource,
    MultiPolygonValue,
    NativeSource,
    OtherValueSource,
    SameKindSource,
    ScalarSource,
    SequenceSource,
    classify_update_source,
    is_typed_value,
    scalar_kind,
)


class TestScalarKind:
    """Test kind names of atomic values."""

    @pytest.mark.parametrize("value,kind", [
        (True, "Boolean"),
        (1, "Integer"),
        (1.0, "Float"),
        (1j, "Number"),
        ("a", "String"),
        (time(1, 2), "Time"),
        (timedelta(seconds=1), "Interval"),
        (ipaddress.ip_address("127.0.0.1"), "IPv4"),
        (ipaddress.ip_address("::1"), "IPv6"),
    ])
    def test_kinds(self, value, kind):
        """Test bool is not reported as an integer and other kinds are named."""
        assert scalar_kind(value) == kind

    def test_non_scalar(self):
        """Test containers are not atomic."""
        assert scalar_kind([1]) is None
        assert scalar_kind({"a": 1}) is None


class TestClassifyUpdateSource:
    """Test each input maps to exactly one variant."""

    def test_none(self):
        """Test None is an empty value."""
        assert classify_update_source(None, MultiPolygonValue) == EmptyValueSource(None)

    def test_typed_values(self):
        """Test typed values split by emptiness and kind."""
        empty = MultiPolygonValue()
        filled = MultiPolygonValue.of([1, 2])

        assert isinstance(classify_update_source(empty, MultiPolygonValue), EmptyValueSource)
        assert isinstance(classify_update_source(filled, MultiPolygonValue), SameKindSource)
        assert isinstance(classify_update_source(filled, object), OtherValueSource)
        assert is_typed_value(filled)
        assert not is_typed_value([1, 2])

    def test_native_predicate_checked_before_sequences(self):
        """Test the native predicate wins over the sequence rule."""
        source = classify_update_source([[1]], MultiPolygonValue, lambda v: True)

        assert isinstance(source, NativeSource)

    def test_sequences(self):
        """Test arrays and mappings are materialized."""
        source = classify_update_source({"a": 1, "b": 2}, MultiPolygonValue)

        assert source == SequenceSource({"a": 1, "b": 2}, (1, 2), "Map")
        assert classify_update_source([1, 2], MultiPolygonValue).kind == "Array"
        assert classify_update_source(b"ab", MultiPolygonValue).kind == "Byte[]"

    def test_cursor_not_consumed(self):
        """Test iterators are classified without reading them."""
        iterator = iter([1, 2])

        source = classify_update_source(iterator, MultiPolygonValue)

        assert isinstance(source, CursorSource)
        assert list(iterator) == [1, 2]

    def test_unknown_object_is_scalar(self):
        """Test arbitrary objects are reported under their type name."""
        source = classify_update_source(object(), MultiPolygonValue)

        assert isinstance(source, ScalarSource)
        assert source.kind == "object"
