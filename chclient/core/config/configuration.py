"""
Immutable client configuration for chclient.

A Configuration holds an option map plus three singleton fields (default
credentials, node selector and an opaque metric registry handle). Every scalar
a client session needs (timeouts, buffer sizes, compression, time zones) is
derived once when the configuration is created. After construction no
attribute can change, so one instance may be shared by any number of threads
and requests.
"""

from datetime import datetime, timezone, tzinfo
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Type, TypeVar, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from ..exceptions import ConfigurationError, TypeMismatchError
from ..models import Credentials, NodeSelector, ServerVersion
from ..types import BufferingMode, Compression, Format, Protocol, SslMode, TimeZoneName
from .options import ClientDefaults, ClientOption, OptionDescriptor, parse_key_value_pairs, parse_option_value

T = TypeVar("T")


def get_buffer_size(size: int, fallback: int, max_size: int) -> int:
    """Resolve an effective buffer size.

    Args:
        size: Configured size, used when strictly positive
        fallback: Size used when the configured one is not positive
        max_size: Ceiling, applied only when strictly positive

    Returns:
        Effective buffer size
    """
    effective = size if size > 0 else fallback
    if max_size > 0 and effective > max_size:
        return max_size
    return effective


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _get_time_zone(name: Optional[TimeZoneName], fallback: Optional[TimeZoneName] = TimeZoneName("UTC")) -> tzinfo:
    if _is_blank(name):
        name = fallback
    if _is_blank(name):
        return datetime.now().astimezone().tzinfo

    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        if name.strip().upper() not in ("UTC", "GMT", "Z"):
            logger.warning(f"Unknown time zone '{name}', using UTC instead")
        return timezone.utc


def _check_option_value(option: Any, value: Any) -> Any:
    if not isinstance(option, OptionDescriptor):
        raise ConfigurationError(
            config_key=str(option), config_value=value, reason="Not an option descriptor"
        )

    value_type = option.value_type
    if isinstance(value, str) and value_type is not str:
        return parse_option_value(value, value_type, option.key)

    if value_type is bool:
        valid = isinstance(value, bool)
    elif value_type is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    elif value_type is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    else:
        valid = isinstance(value, value_type)

    if not valid:
        raise ConfigurationError(
            config_key=option.key,
            config_value=value,
            reason=f"Expected {value_type.__name__} but got {type(value).__name__}",
        )
    return value


class Configuration:
    """Immutable configuration of a client session.

    Attributes:
        credentials: Default credentials, synthesized from the ``user`` and
            ``password`` defaults when not supplied
        node_selector: Node selector, NodeSelector.EMPTY when not supplied
        metric_registry: Opaque metric registry handle, or None

    Equality and hashing only consider the option map, credentials, metric
    registry and node selector; every other attribute derives from them.
    """

    def __init__(
        self,
        options: Optional[Mapping[OptionDescriptor, Any]] = None,
        credentials: Optional[Credentials] = None,
        node_selector: Optional[NodeSelector] = None,
        metric_registry: Optional[Any] = None
    ):
        """Create a configuration.

        Args:
            options: Option values keyed by descriptor; text values are parsed
                per the declared type of the option, None values are dropped
            credentials: Default credentials
            node_selector: Node selector
            metric_registry: Metric registry handle

        Raises:
            ConfigurationError: If an option value does not match its type
        """
        checked = {}
        for option, value in (options or {}).items():
            if value is None:
                continue
            checked[option] = _check_option_value(option, value)
        self._options = MappingProxyType(checked)

        self.is_async = self.get_option_or_default(ClientOption.ASYNC, ClientDefaults.ASYNC)
        self.auto_discovery = self.get_bool_option(ClientOption.AUTO_DISCOVERY)
        self.custom_settings: Mapping[str, str] = MappingProxyType(
            parse_key_value_pairs(self.get_str_option(ClientOption.CUSTOM_SETTINGS))
        )
        self.client_name = self.get_str_option(ClientOption.CLIENT_NAME)

        # Option names describe what the server does: it decompresses what the
        # client sends and compresses what it returns. Request settings are
        # therefore read from DECOMPRESS_* and response settings from
        # COMPRESS_*. Keep this cross mapping, option keys are public.
        self.is_request_compressed = self.get_bool_option(ClientOption.DECOMPRESS)
        self.request_compress_algorithm = (
            self.get_option(ClientOption.DECOMPRESS_ALGORITHM, Compression)
            if self.is_request_compressed else Compression.NONE
        )
        self.request_compress_level = (
            self.get_int_option(ClientOption.DECOMPRESS_LEVEL) if self.is_request_compressed else 0
        )
        self.is_response_compressed = self.get_bool_option(ClientOption.COMPRESS)
        self.response_compress_algorithm = (
            self.get_option(ClientOption.COMPRESS_ALGORITHM, Compression)
            if self.is_response_compressed else Compression.NONE
        )
        self.response_compress_level = (
            self.get_int_option(ClientOption.COMPRESS_LEVEL) if self.is_response_compressed else 0
        )

        self.connection_timeout = self.get_int_option(ClientOption.CONNECTION_TIMEOUT)
        self.database: str = self.get_option_or_default(ClientOption.DATABASE, ClientDefaults.DATABASE)
        self.format: Format = self.get_option_or_default(ClientOption.FORMAT, ClientDefaults.FORMAT)

        self.max_buffer_size = get_buffer_size(self.get_int_option(ClientOption.MAX_BUFFER_SIZE), -1, -1)
        self.buffer_size = get_buffer_size(
            self.get_int_option(ClientOption.BUFFER_SIZE), self.max_buffer_size, self.max_buffer_size
        )
        self.buffer_queue_variation = self.get_int_option(ClientOption.BUFFER_QUEUE_VARIATION)
        self.read_buffer_size = get_buffer_size(
            self.get_int_option(ClientOption.READ_BUFFER_SIZE), self.buffer_size, self.max_buffer_size
        )
        self.write_buffer_size = get_buffer_size(
            self.get_int_option(ClientOption.WRITE_BUFFER_SIZE), self.buffer_size, self.max_buffer_size
        )
        self.request_chunk_size = get_buffer_size(
            self.get_int_option(ClientOption.REQUEST_CHUNK_SIZE), self.write_buffer_size, self.max_buffer_size
        )
        self.request_buffering: BufferingMode = self.get_option_or_default(
            ClientOption.REQUEST_BUFFERING, ClientDefaults.BUFFERING
        )
        self.response_buffering: BufferingMode = self.get_option_or_default(
            ClientOption.RESPONSE_BUFFERING, ClientDefaults.BUFFERING
        )

        self.max_execution_time = self.get_int_option(ClientOption.MAX_EXECUTION_TIME)
        self.max_queued_buffers = self.get_int_option(ClientOption.MAX_QUEUED_BUFFERS)
        self.max_queued_requests = self.get_int_option(ClientOption.MAX_QUEUED_REQUESTS)
        self.max_result_rows = self.get_long_option(ClientOption.MAX_RESULT_ROWS)
        self.max_threads_per_client = self.get_int_option(ClientOption.MAX_THREADS_PER_CLIENT)
        self.node_check_interval = self.get_int_option(ClientOption.NODE_CHECK_INTERVAL)
        self.failover = self.get_int_option(ClientOption.FAILOVER)
        self.retry = self.get_int_option(ClientOption.RETRY)
        self.repeat_on_session_lock = self.get_bool_option(ClientOption.REPEAT_ON_SESSION_LOCK)
        self.reuse_value_wrapper = self.get_bool_option(ClientOption.REUSE_VALUE_WRAPPER)

        self.has_server_info = (
            not _is_blank(self.get_str_option(ClientOption.SERVER_TIME_ZONE))
            and not _is_blank(self.get_str_option(ClientOption.SERVER_VERSION))
        )
        self.server_time_zone = _get_time_zone(
            self.get_option_or_default(ClientOption.SERVER_TIME_ZONE, ClientDefaults.SERVER_TIME_ZONE),
            ClientDefaults.SERVER_TIME_ZONE.effective_default_value,
        )
        self.server_version = ServerVersion.of(
            self.get_option_or_default(ClientOption.SERVER_VERSION, ClientDefaults.SERVER_VERSION)
        )

        self.session_timeout = self.get_int_option(ClientOption.SESSION_TIMEOUT)
        self.session_check = self.get_bool_option(ClientOption.SESSION_CHECK)
        self.socket_timeout = self.get_int_option(ClientOption.SOCKET_TIMEOUT)
        self.ssl = self.get_bool_option(ClientOption.SSL)
        self.ssl_mode = self.get_option(ClientOption.SSL_MODE, SslMode)
        self.ssl_root_cert = self.get_str_option(ClientOption.SSL_ROOT_CERTIFICATE)
        self.ssl_cert = self.get_str_option(ClientOption.SSL_CERTIFICATE)
        self.ssl_key = self.get_str_option(ClientOption.SSL_KEY)

        transaction_timeout = self.get_int_option(ClientOption.TRANSACTION_TIMEOUT)
        self.transaction_timeout = self.session_timeout if transaction_timeout < 1 else transaction_timeout

        self.use_blocking_queue = self.get_bool_option(ClientOption.USE_BLOCKING_QUEUE)
        self.use_objects_in_array = self.get_bool_option(ClientOption.USE_OBJECTS_IN_ARRAYS)
        self.use_no_proxy = self.get_bool_option(ClientOption.USE_NO_PROXY)
        self.use_server_time_zone = self.get_bool_option(ClientOption.USE_SERVER_TIME_ZONE)
        self.use_server_time_zone_for_dates = self.get_bool_option(ClientOption.USE_SERVER_TIME_ZONE_FOR_DATES)

        if self.use_server_time_zone:
            self.use_time_zone = self.server_time_zone
        else:
            self.use_time_zone = _get_time_zone(self.get_str_option(ClientOption.USE_TIME_ZONE), None)
        # None keeps date values time zone naive
        self.time_zone_for_date: Optional[tzinfo] = (
            self.use_time_zone if self.use_server_time_zone_for_dates else None
        )

        self.has_explicit_credentials = credentials is not None
        self.credentials = credentials if credentials is not None else Credentials.from_user_and_password(
            self.get_str_option(ClientDefaults.USER), self.get_str_option(ClientDefaults.PASSWORD)
        )
        self.has_explicit_node_selector = node_selector is not None
        self.node_selector = node_selector if node_selector is not None else NodeSelector.EMPTY
        self.metric_registry = metric_registry

        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Configuration is immutable, cannot set '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Configuration is immutable, cannot delete '{name}'")

    @property
    def all_options(self) -> Mapping[OptionDescriptor, Any]:
        """Read-only view of explicitly configured options."""
        return self._options

    @property
    def preferred_protocols(self) -> Tuple[Protocol, ...]:
        return self.node_selector.preferred_protocols

    @property
    def preferred_tags(self) -> FrozenSet[str]:
        return self.node_selector.preferred_tags

    def has_option(self, option: Optional[OptionDescriptor]) -> bool:
        """Check whether the option is explicitly configured."""
        return option is not None and option in self._options

    def get_option(self, option: OptionDescriptor, value_type: Type[T]) -> T:
        """Get a typed option value, falling back to its effective default.

        Args:
            option: Option to look up
            value_type: Expected type, must be the declared type of the option

        Returns:
            Option value

        Raises:
            TypeMismatchError: If value_type is not the declared type
        """
        if option is None:
            raise ValueError("Non-null option is required")
        if value_type is None:
            raise ValueError("Non-null value type is required")
        if option.value_type is not value_type:
            raise TypeMismatchError(option, option.value_type, value_type)

        value = self._options.get(option)
        return value if value is not None else option.effective_default_value

    def get_option_or_default(
        self,
        option: OptionDescriptor,
        default: Union["Configuration", OptionDescriptor, None] = None
    ) -> Any:
        """Get an option value, or a default when it is not configured.

        Args:
            option: Option to look up
            default: Configuration to read the default from, or a descriptor
                whose effective default is used; None means the effective
                default of the option itself

        Returns:
            Option value
        """
        if option is None:
            raise ValueError("Non-null option is required")

        if option in self._options:
            return self._options[option]
        if isinstance(default, Configuration):
            return default.get_option_or_default(option)
        if default is not None:
            return default.effective_default_value
        return option.effective_default_value

    def get_bool_option(self, option: OptionDescriptor) -> bool:
        """Shortcut of ``get_option(option, bool)``."""
        return self.get_option(option, bool)

    def get_int_option(self, option: OptionDescriptor) -> int:
        """Shortcut of ``get_option(option, int)``."""
        return self.get_option(option, int)

    def get_long_option(self, option: OptionDescriptor) -> int:
        """Shortcut of ``get_option(option, int)`` for 64-bit knobs."""
        return self.get_option(option, int)

    def get_str_option(self, option: OptionDescriptor) -> str:
        """Shortcut of ``get_option(option, str)``."""
        return self.get_option(option, str)

    def to_properties(self) -> Dict[str, str]:
        """Render explicitly configured options as key to text, for diagnostics.

        Sensitive values are masked.
        """
        properties = {}
        for option, value in self._options.items():
            if option.sensitive:
                properties[option.key] = "***"
            elif isinstance(value, Enum):
                properties[option.key] = value.name
            elif isinstance(value, bool):
                properties[option.key] = str(value).lower()
            else:
                properties[option.key] = str(value)
        return properties

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Configuration) or type(self) is not type(other):
            return NotImplemented
        return (
            self._options == other._options
            and self.credentials == other.credentials
            and self.metric_registry == other.metric_registry
            and self.node_selector == other.node_selector
        )

    def __hash__(self) -> int:
        # metric registry handles may be unhashable, equality still covers them
        return hash((frozenset(self._options.items()), self.credentials, self.node_selector))

    def __repr__(self) -> str:
        return (
            f"Configuration(options={self.to_properties()!r}, credentials={self.credentials!r}, "
            f"node_selector={self.node_selector!r}, metric_registry={self.metric_registry!r})"
        )
