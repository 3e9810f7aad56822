"""Option registry for chclient - catalogue of all known option descriptors."""

import threading
from importlib.metadata import entry_points
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Type

from loguru import logger

from ..core.config.options import ClientOption, OptionDescriptor
from ..core.exceptions import DiscoveryError
from ..core.types import OptionKey

CLIENT_ENTRY_POINT_GROUP = "chclient.clients"


def discover_clients() -> List[Any]:
    """Load every client implementation registered under the entry point group.

    Entry points may point at a class (instantiated without arguments) or at
    an instance. Entry points that fail to load are skipped.

    Returns:
        List of client implementations
    """
    clients = []
    for ep in entry_points(group=CLIENT_ENTRY_POINT_GROUP):
        try:
            target = ep.load()
            clients.append(target() if isinstance(target, type) else target)
            logger.debug(f"Discovered client implementation {ep.name} ({ep.value})")
        except Exception as e:
            logger.warning(f"Failed to load client implementation {ep.name}: {e}")
    return clients


class OptionRegistry:
    """Read-only mapping from option key to descriptor.

    The registry is built once: on first use it asks the discovery callable for
    client implementations and registers every member of their option sets.
    Later contributors win on key collision. Any failure while discovering
    degrades to an empty contributed set, built-in options keep working.
    After the build the registry is never mutated, so concurrent reads need
    no locking.
    """

    def __init__(
        self,
        discover: Optional[Callable[[], Iterable[Any]]] = None,
        builtin: Type[OptionDescriptor] = ClientOption
    ):
        """Initialize the option registry.

        Args:
            discover: Callable returning client implementations, defaults to
                entry point discovery
            builtin: Built-in option set, looked up before contributed options
        """
        self._discover = discover if discover is not None else discover_clients
        self._builtin = builtin
        self._builtin_options = MappingProxyType({o.key: o for o in builtin})
        self._custom_options: Optional[Mapping[OptionKey, OptionDescriptor]] = None
        self._lock = threading.Lock()

    def build(self) -> "OptionRegistry":
        """Build the contributed option table if not built yet.

        Returns:
            This registry
        """
        if self._custom_options is None:
            with self._lock:
                if self._custom_options is None:
                    self._custom_options = self._load_custom_options()
        return self

    def _load_custom_options(self) -> Mapping[OptionKey, OptionDescriptor]:
        options = {}
        try:
            for client in self._discover() or ():
                option_class = getattr(client, "option_class", None)
                if option_class is None or option_class is self._builtin:
                    continue
                try:
                    members = list(option_class)
                except TypeError as e:
                    raise DiscoveryError(
                        client=getattr(client, "name", type(client).__name__),
                        reason=f"{option_class!r} is not an option set",
                        cause=e,
                    ) from e
                for option in members:
                    options[option.key] = option
                logger.debug(f"Registered {len(members)} options from {option_class.__name__}")
        except Exception as e:
            logger.warning(f"Failed to load custom options, using built-in options only: {e}")
            options = {}

        return MappingProxyType(options)

    @property
    def is_built(self) -> bool:
        return self._custom_options is not None

    @property
    def builtin_options(self) -> Mapping[OptionKey, OptionDescriptor]:
        """Built-in options by key."""
        return self._builtin_options

    @property
    def custom_options(self) -> Mapping[OptionKey, OptionDescriptor]:
        """Options contributed by client implementations, by key."""
        return self.build()._custom_options

    def resolve(self, key: Optional[OptionKey]) -> Optional[OptionDescriptor]:
        """Get the descriptor for a key, built-in options first.

        Args:
            key: Option key

        Returns:
            Descriptor or None if the key is unknown
        """
        if key is None:
            return None
        option = self._builtin_options.get(key)
        if option is None:
            option = self.custom_options.get(key)
        return option

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.resolve(key) is not None

    def __iter__(self) -> Iterator[str]:
        seen = set()
        for key in list(self._builtin_options) + list(self.custom_options):
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return sum(1 for _ in self)


# Global registry instance (lazy initialization)
_registry: Optional[OptionRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> OptionRegistry:
    """Get the process-wide registry, building it on first access.

    Returns:
        Global OptionRegistry instance
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = OptionRegistry().build()
    return _registry


def reset_registry() -> None:
    """Drop the process-wide registry so the next access rebuilds it."""
    global _registry
    with _registry_lock:
        _registry = None


__all__ = [
    'CLIENT_ENTRY_POINT_GROUP',
    'OptionRegistry',
    'discover_clients',
    'get_registry',
    'reset_registry',
]
