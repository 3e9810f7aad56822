"""chclient Core Models Package - Domain model definitions.

These models are the singleton fields and server information carried by a
configuration. They follow these principles:
- Immutable data structures using dataclasses with frozen=True
- Equality and hashing by value so configurations can be compared
"""

from .credentials import Credentials
from .node_selector import NodeSelector
from .server_version import ServerVersion

__all__ = [
    "Credentials",
    "NodeSelector",
    "ServerVersion",
]
