"""chclient Core Types - Common type definitions and aliases.

This module contains enums and type aliases shared by the configuration layer
and the typed values. Enum members are looked up by name when options are
parsed from text.
"""

from enum import Enum
from typing import List, NewType, Optional

# String-based type aliases for better semantic clarity
OptionKey = NewType("OptionKey", str)       # e.g., "socket_timeout"
TimeZoneName = NewType("TimeZoneName", str)  # e.g., "Asia/Shanghai"

# Geometry aliases
Point = List[float]                 # [x, y]
Ring = List[Point]
Polygon = List[Ring]
NestedMultiPolygon = List[Polygon]


class Compression(Enum):
    """Compression algorithms understood by the server."""

    NONE = ("", "none")
    BROTLI = ("br", "brotli")
    BZ2 = ("bz2", "bzip2")
    DEFLATE = ("deflate", "deflate")
    GZIP = ("gzip", "gzip")
    LZ4 = ("lz4", "lz4")
    SNAPPY = ("snappy", "snappy")
    XZ = ("xz", "xz")
    ZSTD = ("zstd", "zstd")

    def __init__(self, encoding: str, codec: str):
        self.encoding = encoding
        self.codec = codec

    @classmethod
    def from_encoding(cls, encoding: Optional[str]) -> "Compression":
        """Convert content encoding to Compression, defaulting to NONE for unknown values."""
        if encoding:
            value = encoding.strip().lower()
            for member in cls:
                if member.encoding == value or member.codec == value:
                    return member
        return cls.NONE


class Format(Enum):
    """Data formats supported for query input and output."""

    ARROW = ("Arrow", True, True, True)
    CSV = ("CSV", True, True, False)
    CSV_WITH_NAMES = ("CSVWithNames", True, True, False)
    JSON = ("JSON", False, True, False)
    JSON_EACH_ROW = ("JSONEachRow", True, True, False)
    JSON_COMPACT_EACH_ROW = ("JSONCompactEachRow", True, True, False)
    NATIVE = ("Native", True, True, True)
    PARQUET = ("Parquet", True, True, True)
    PRETTY = ("Pretty", False, True, False)
    ROW_BINARY = ("RowBinary", True, True, True)
    ROW_BINARY_WITH_NAMES_AND_TYPES = ("RowBinaryWithNamesAndTypes", True, True, True)
    TAB_SEPARATED = ("TabSeparated", True, True, False)
    TAB_SEPARATED_WITH_NAMES = ("TabSeparatedWithNames", True, True, False)
    TAB_SEPARATED_WITH_NAMES_AND_TYPES = ("TabSeparatedWithNamesAndTypes", True, True, False)
    VALUES = ("Values", True, True, False)

    def __init__(self, format_name: str, supports_input: bool, supports_output: bool, binary: bool):
        self.format_name = format_name
        self.supports_input = supports_input
        self.supports_output = supports_output
        self.binary = binary

    @property
    def is_text(self) -> bool:
        """Return True if this format is textual."""
        return not self.binary

    @classmethod
    def from_string(cls, value: str) -> "Format":
        """Convert a server format name (e.g. "RowBinary") to Format."""
        for member in cls:
            if member.format_name == value:
                return member
        raise ValueError(f"Unknown format: {value}")


class BufferingMode(Enum):
    """Buffering strategy for request and response streams."""

    RESOURCE_EFFICIENT = "resource_efficient"
    PERFORMANCE = "performance"
    CUSTOM = "custom"


class SslMode(Enum):
    """SSL verification mode."""

    NONE = "none"
    STRICT = "strict"


class Protocol(Enum):
    """Network protocols a node may speak."""

    ANY = ("any", 8123)
    HTTP = ("http", 8123)
    GRPC = ("grpc", 9100)
    TCP = ("tcp", 9000)
    LOCAL = ("local", 0)
    POSTGRESQL = ("postgresql", 9005)
    MYSQL = ("mysql", 9004)

    def __init__(self, scheme: str, default_port: int):
        self.scheme = scheme
        self.default_port = default_port

    @classmethod
    def from_scheme(cls, scheme: str) -> "Protocol":
        """Convert URI scheme to Protocol, defaulting to ANY for unknown values."""
        value = (scheme or "").strip().lower()
        if value == "https":
            value = "http"
        elif value == "grpcs":
            value = "grpc"
        for member in cls:
            if member.scheme == value:
                return member
        return cls.ANY
