"""
Configuration resolver for chclient.

Builds one immutable Configuration from an ordered sequence of partial ones,
e.g. global defaults, per-node overrides and per-request overrides.

Merge policy:
    - Option map: sources are overlaid in order, so for a key defined more
      than once the LAST source wins. Repeated references to the same source
      object are only applied once.
    - Credentials, node selector and metric registry: the FIRST source that
      supplies a value wins.
"""

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from ..models import Credentials, NodeSelector
from .configuration import Configuration
from .options import OptionDescriptor, parse_option_value

if TYPE_CHECKING:
    from ...registry import OptionRegistry


def _unique_sources(sources: Optional[Iterable[Optional[Configuration]]]) -> List[Configuration]:
    unique: List[Configuration] = []
    for config in sources or ():
        if config is None:
            continue
        if any(existing is config for existing in unique):
            continue
        unique.append(config)
    return unique


def merge_options(sources: Optional[Sequence[Optional[Configuration]]]) -> Dict[OptionDescriptor, Any]:
    """Overlay option maps in order; the last source defining a key wins."""
    options: Dict[OptionDescriptor, Any] = {}
    for config in _unique_sources(sources):
        options.update(config.all_options)
    return options


def merge_credentials(sources: Optional[Sequence[Optional[Configuration]]]) -> Optional[Credentials]:
    """Credentials of the first source that supplied them explicitly."""
    for config in sources or ():
        if config is not None and config.has_explicit_credentials:
            return config.credentials
    return None


def merge_node_selector(sources: Optional[Sequence[Optional[Configuration]]]) -> Optional[NodeSelector]:
    """Node selector of the first source that supplied one explicitly."""
    for config in sources or ():
        if config is not None and config.has_explicit_node_selector:
            return config.node_selector
    return None


def merge_metric_registry(sources: Optional[Sequence[Optional[Configuration]]]) -> Optional[Any]:
    """Metric registry of the first source that has one."""
    for config in sources or ():
        if config is not None and config.metric_registry is not None:
            return config.metric_registry
    return None


class ConfigurationResolver:
    """Resolve configurations from layered sources and property maps.

    The resolver only needs the option registry to map property keys to
    descriptors; building from Configuration sources never touches it.
    """

    def __init__(self, registry: Optional["OptionRegistry"] = None):
        """Initialize the resolver.

        Args:
            registry: Option registry, the process-wide one when None
        """
        self._registry = registry

    @property
    def registry(self) -> "OptionRegistry":
        if self._registry is None:
            from ...registry import get_registry

            self._registry = get_registry()
        return self._registry

    def build(self, sources: Optional[Sequence[Optional[Configuration]]] = None) -> Configuration:
        """Consolidate the given configurations into a new one.

        Args:
            sources: Configurations in order of application, None entries are skipped

        Returns:
            New immutable configuration
        """
        sources = list(sources or ())
        config = Configuration(
            merge_options(sources),
            merge_credentials(sources),
            merge_node_selector(sources),
            merge_metric_registry(sources),
        )
        logger.debug(f"Resolved configuration from {len(sources)} sources with {len(config.all_options)} options")
        return config

    def to_client_options(self, properties: Optional[Mapping[Any, Any]]) -> Dict[OptionDescriptor, Any]:
        """Convert string keyed properties to an option map.

        Keys are looked up in the built-in options first, then in options
        contributed by client implementations. Unknown keys and None keys or
        values are ignored. Values are parsed from their text form per the
        declared type of the option.

        Args:
            properties: Key-value pairs, e.g. from a connection string

        Returns:
            New option map

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        options: Dict[OptionDescriptor, Any] = {}
        if not properties:
            return options

        for key, value in properties.items():
            if key is None or value is None:
                continue

            option = self.registry.resolve(str(key))
            if option is None:
                logger.debug(f"Ignoring unknown option '{key}'")
                continue

            options[option] = parse_option_value(str(value), option.value_type, option.key)

        return options

    def from_properties(
        self,
        properties: Optional[Mapping[Any, Any]],
        credentials: Optional[Credentials] = None,
        node_selector: Optional[NodeSelector] = None,
        metric_registry: Optional[Any] = None
    ) -> Configuration:
        """Create a configuration from string keyed properties."""
        return Configuration(
            self.to_client_options(properties), credentials, node_selector, metric_registry
        )


def build_configuration(
    *sources: Optional[Configuration],
    registry: Optional["OptionRegistry"] = None
) -> Configuration:
    """Shortcut of ``ConfigurationResolver(registry).build(sources)``."""
    return ConfigurationResolver(registry).build(sources)
