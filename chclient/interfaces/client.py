"""ClientPlugin protocol for chclient - contract of discoverable client implementations."""

from typing import Optional, Protocol, Type, runtime_checkable

from ..core.types import Protocol as NodeProtocol


@runtime_checkable
class ClientPlugin(Protocol):
    """Abstract protocol for client implementations.

    Implementations are discovered through the ``chclient.clients`` entry
    point group. Each may expose an option set (an Enum class mixing in
    OptionDescriptor) whose members extend the option registry.
    """

    @property
    def name(self) -> str:
        """Short name of the implementation, e.g. "http"."""
        ...

    @property
    def option_class(self) -> Optional[Type]:
        """Option set contributed by this implementation, None if it has none."""
        ...

    def accept(self, protocol: NodeProtocol) -> bool:
        """Check if this implementation can talk the given protocol."""
        ...
