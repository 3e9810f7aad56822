"""chclient NodeSelector Domain Model - Picks interested nodes from a list."""

from dataclasses import dataclass, field
from typing import ClassVar, FrozenSet, Iterable, Optional, Tuple

from ..types import Protocol


@dataclass(frozen=True)
class NodeSelector:
    """Immutable preference of protocols and tags used to select nodes.

    An empty selector accepts every node.

    Attributes:
        preferred_protocols: Protocols in order of preference
        preferred_tags: Tags a node should carry
    """

    EMPTY: ClassVar["NodeSelector"]

    preferred_protocols: Tuple[Protocol, ...] = field(default_factory=tuple)
    preferred_tags: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(
        cls,
        protocols: Optional[Iterable[Protocol]] = None,
        tags: Optional[Iterable[str]] = None
    ) -> "NodeSelector":
        """Create a node selector, reusing EMPTY when nothing is preferred."""
        protocol_list = []
        for p in protocols or ():
            if p is not None and p not in protocol_list:
                protocol_list.append(p)
        tag_set = frozenset(t.strip() for t in (tags or ()) if t and t.strip())

        if not protocol_list and not tag_set:
            return cls.EMPTY
        return cls(tuple(protocol_list), tag_set)

    @property
    def is_empty(self) -> bool:
        return not self.preferred_protocols and not self.preferred_tags

    def match_any_of_preferred_protocols(self, protocol: Protocol) -> bool:
        """Return True if no protocol is preferred or the given one is."""
        if not self.preferred_protocols or protocol == Protocol.ANY:
            return True
        return protocol in self.preferred_protocols

    def match_all_preferred_tags(self, tags: Iterable[str]) -> bool:
        """Return True if all preferred tags are in the given tags."""
        if not self.preferred_tags:
            return True
        return self.preferred_tags.issubset(set(tags or ()))

    def match_any_of_preferred_tags(self, tags: Iterable[str]) -> bool:
        """Return True if any preferred tag is in the given tags."""
        if not self.preferred_tags:
            return True
        return not self.preferred_tags.isdisjoint(set(tags or ()))


NodeSelector.EMPTY = NodeSelector()
