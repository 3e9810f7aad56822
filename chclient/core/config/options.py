"""
Option descriptors for chclient.

An option is a named, strongly-typed configuration knob with a default value.
Option sets are Enum classes mixing in OptionDescriptor; each member is
declared as ``(key, default_value, description[, sensitive])`` and its value
type is the type of the declared default. Client implementations contribute
their own option sets which the option registry picks up at discovery time.
"""

import os
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError
from ..types import BufferingMode, Compression, Format, OptionKey, Protocol, SslMode

_TRUE_VALUES = {"1", "true"}


class OptionDescriptor:
    """Mixin giving Enum members the option descriptor attributes.

    Attributes:
        key: Unique key of the option, used in properties and connection strings
        default_value: Declared default value
        description: Human readable description
        sensitive: Whether the value should be masked in diagnostics
        value_type: Type of the option value, derived from the default
    """

    def __init__(self, key: OptionKey, default_value: Any, description: str, sensitive: bool = False):
        if default_value is None:
            raise ValueError(f"Option '{key}' must declare a non-None default value")
        self.key = key
        self.default_value = default_value
        self.description = description
        self.sensitive = sensitive
        self.value_type = type(default_value)

    @property
    def prefix(self) -> str:
        """Prefix of the environment variable overriding the default value."""
        return "CHC"

    @property
    def environment_variable(self) -> str:
        """Name of the environment variable overriding the default value."""
        return f"{self.prefix}_{self.name}".upper()

    @property
    def effective_default_value(self) -> Any:
        """Default value after applying the environment variable override."""
        value = os.environ.get(self.environment_variable)
        if not value:
            return self.default_value
        return parse_option_value(value, self.value_type, self.key)

    @classmethod
    def from_key(cls, key: Optional[OptionKey]):
        """Look up a member of this option set by key, or None."""
        if key is None:
            return None
        for option in cls:
            if option.key == key:
                return option
        return None


def _parse_enum(value: str, enum_class: type) -> Enum:
    text = value.strip()
    if text in enum_class.__members__:
        return enum_class[text]

    upper = text.upper()
    if upper in enum_class.__members__:
        return enum_class[upper]

    for member in enum_class:
        raw = member.value
        candidates = raw if isinstance(raw, tuple) else (raw,)
        if any(isinstance(c, str) and c.lower() == text.lower() for c in candidates):
            return member

    raise ValueError(f"'{value}' is not a valid {enum_class.__name__}")


def parse_option_value(value: str, value_type: type, key: Optional[str] = None) -> Any:
    """Parse the textual form of an option value.

    Args:
        value: Text to parse
        value_type: Declared type of the option
        key: Option key, only used for error reporting

    Returns:
        Value of the requested type

    Raises:
        ConfigurationError: If the text cannot be parsed
    """
    if value is None:
        return None

    try:
        if value_type is str:
            return value
        elif value_type is bool:
            return value.strip().lower() in _TRUE_VALUES
        elif value_type is int:
            return int(value.strip())
        elif value_type is float:
            return float(value.strip())
        elif isinstance(value_type, type) and issubclass(value_type, Enum):
            return _parse_enum(value, value_type)
        else:
            return value_type(value)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            config_key=key,
            config_value=value,
            reason=f"Cannot parse '{value}' as {getattr(value_type, '__name__', value_type)}",
            cause=e,
        ) from e


def parse_key_value_pairs(text: Optional[str], delimiter: str = ",") -> Dict[str, str]:
    """Parse ``k1=v1,k2=v2`` into a dict.

    Backslash escapes the next character. Blank keys are skipped and an entry
    without ``=`` maps to an empty string.
    """
    if not text or not text.strip():
        return {}

    entries = []
    current = []
    escaped = False
    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == delimiter:
            entries.append("".join(current))
            current = []
        else:
            current.append(ch)
    entries.append("".join(current))

    result = {}
    for entry in entries:
        key, sep, val = entry.partition("=")
        key = key.strip()
        if not key:
            continue
        result[key] = val.strip() if sep else ""
    return result


class ClientOption(OptionDescriptor, Enum):
    """Generic options shared by all client implementations."""

    ASYNC = ("async", True, "Whether the client should run in async mode.")
    AUTO_DISCOVERY = ("auto_discovery", False, "Whether the client should discover more nodes from system tables.")
    CUSTOM_SETTINGS = ("custom_settings", "", "Comma separated key-value pairs of server settings.")
    CLIENT_NAME = ("client_name", "chclient", "Client name, reported to the server.")
    COMPRESS = ("compress", True, "Whether the server will compress response it sends to client.")
    COMPRESS_ALGORITHM = ("compress_algorithm", Compression.LZ4, "Algorithm used for compressing response.")
    COMPRESS_LEVEL = ("compress_level", -1, "Compression level for response, -1 means default level.")
    DECOMPRESS = ("decompress", False, "Whether the server will decompress request from client.")
    DECOMPRESS_ALGORITHM = ("decompress_algorithm", Compression.LZ4, "Algorithm for compressing request.")
    DECOMPRESS_LEVEL = ("decompress_level", -1, "Compression level for request, -1 means default level.")
    CONNECTION_TIMEOUT = ("connect_timeout", 5000, "Connection timeout in milliseconds.")
    DATABASE = ("database", "", "Default database.")
    FORMAT = ("format", Format.TAB_SEPARATED, "Default data format for queries.")
    MAX_BUFFER_SIZE = ("max_buffer_size", 128 * 1024, "Maximum buffer size in bytes used for streaming.")
    BUFFER_SIZE = ("buffer_size", 8192, "Default buffer size in bytes for both read and write.")
    BUFFER_QUEUE_VARIATION = ("buffer_queue_variation", 100,
                              "How many times the buffer queue is filled up before increasing capacity.")
    READ_BUFFER_SIZE = ("read_buffer_size", 0, "Read buffer size in bytes, zero or negative means buffer_size.")
    WRITE_BUFFER_SIZE = ("write_buffer_size", 0, "Write buffer size in bytes, zero or negative means buffer_size.")
    REQUEST_CHUNK_SIZE = ("request_chunk_size", 0,
                          "Request chunk size in bytes, zero or negative means write_buffer_size.")
    REQUEST_BUFFERING = ("request_buffering", BufferingMode.RESOURCE_EFFICIENT, "Buffering mode for request.")
    RESPONSE_BUFFERING = ("response_buffering", BufferingMode.RESOURCE_EFFICIENT, "Buffering mode for response.")
    MAX_EXECUTION_TIME = ("max_execution_time", 0, "Maximum query execution time in seconds, 0 means no limit.")
    MAX_QUEUED_BUFFERS = ("max_queued_buffers", 512, "Maximum queued buffers, 0 means no limit.")
    MAX_QUEUED_REQUESTS = ("max_queued_requests", 0, "Maximum queued requests, 0 means no limit.")
    MAX_RESULT_ROWS = ("max_result_rows", 0, "Limit on the number of rows in the result, 0 means no limit.")
    MAX_THREADS_PER_CLIENT = ("max_threads_per_client", 0, "Size of thread pool for each client.")
    NODE_CHECK_INTERVAL = ("node_check_interval", 0, "Interval in milliseconds of node health check, 0 disables it.")
    FAILOVER = ("failover", 0, "Maximum number of times failover can happen for a request.")
    RETRY = ("retry", 0, "Maximum number of times retry can happen for a request.")
    REPEAT_ON_SESSION_LOCK = ("repeat_on_session_lock", True,
                              "Whether to repeat the request when the session is locked.")
    REUSE_VALUE_WRAPPER = ("reuse_value_wrapper", True, "Whether to reuse value containers while reading rows.")
    SERVER_TIME_ZONE = ("server_time_zone", "", "Server time zone, empty means it was not reported.")
    SERVER_VERSION = ("server_version", "", "Server version, empty means it was not reported.")
    SESSION_TIMEOUT = ("session_timeout", 0, "Session timeout in seconds, 0 means server default.")
    SESSION_CHECK = ("session_check", False, "Whether to check if the session exists.")
    SOCKET_TIMEOUT = ("socket_timeout", 30000, "Socket timeout in milliseconds.")
    SSL = ("ssl", False, "Whether to use SSL/TLS for the connection.")
    SSL_MODE = ("sslmode", SslMode.STRICT, "Verify or not certificate.")
    SSL_ROOT_CERTIFICATE = ("sslrootcert", "", "SSL/TLS root certificates.")
    SSL_CERTIFICATE = ("sslcert", "", "SSL/TLS certificate.")
    SSL_KEY = ("sslkey", "", "RSA key in PKCS#8 format.", True)
    TRANSACTION_TIMEOUT = ("transaction_timeout", 0,
                           "Transaction timeout in seconds, less than 1 means session_timeout.")
    USE_BLOCKING_QUEUE = ("use_blocking_queue", False, "Whether to use blocking queue for buffering.")
    USE_OBJECTS_IN_ARRAYS = ("use_objects_in_arrays", False,
                             "Whether to use object arrays instead of primitive arrays.")
    USE_NO_PROXY = ("use_no_proxy", False, "Whether to bypass any configured proxy.")
    USE_SERVER_TIME_ZONE = ("use_server_time_zone", True,
                            "Whether to use server time zone, takes precedence over use_time_zone.")
    USE_SERVER_TIME_ZONE_FOR_DATES = ("use_server_time_zone_for_dates", False,
                                      "Whether to use the working time zone for date values.")
    USE_TIME_ZONE = ("use_time_zone", "", "Time zone to use, empty means the process local time zone.")


class ClientDefaults(OptionDescriptor, Enum):
    """Process wide defaults, used as fallback for unset client options."""

    ASYNC = ("async", True, "Whether the client should run in async mode.")
    AUTO_SESSION = ("auto_session", True, "Whether to create a session automatically.")
    BUFFERING = ("buffering", BufferingMode.RESOURCE_EFFICIENT, "Default buffering mode.")
    CLUSTER = ("cluster", "", "Cluster name.")
    DATABASE = ("database", "", "Default database.")
    FORMAT = ("format", Format.TAB_SEPARATED, "Default data format.")
    HOST = ("host", "localhost", "Default server host.")
    PORT = ("port", 8123, "Default server port.")
    PROTOCOL = ("protocol", Protocol.ANY, "Default protocol.")
    USER = ("user", "default", "Default user name.")
    PASSWORD = ("password", "", "Default password.", True)
    SERVER_TIME_ZONE = ("server_time_zone", "UTC", "Server time zone used when the server did not report one.")
    SERVER_VERSION = ("server_version", "latest", "Server version used when the server did not report one.")
