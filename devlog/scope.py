"""Immutable chain of groups and attribute batches entered by a handler."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .attrs import Attr


@dataclass(frozen=True)
class GroupOrAttrs:
    """Either a group name or a batch of attributes, never both."""

    group: str = ""
    attrs: tuple[Attr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "attrs", tuple(self.attrs))
        if bool(self.group) == bool(self.attrs):
            raise ValueError("GroupOrAttrs needs exactly one of a group name or attributes")


class Scope(Sequence):
    """Append-only sequence of :class:`GroupOrAttrs`.

    ``extend`` returns a new scope; the receiver keeps its own nodes, so
    handlers derived from a common parent never see each other's entries.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: tuple[GroupOrAttrs, ...] = ()):
        self._nodes = tuple(nodes)

    def extend(self, node: GroupOrAttrs) -> "Scope":
        return Scope(self._nodes + (node,))

    def without_trailing_groups(self) -> "Scope":
        """Drop group entries at the end of the chain; they have no attributes."""
        nodes = self._nodes
        while nodes and nodes[-1].group:
            nodes = nodes[:-1]
        if len(nodes) == len(self._nodes):
            return self
        return Scope(nodes)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Scope(self._nodes[index])
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GroupOrAttrs]:
        return iter(self._nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return self._nodes == other._nodes

    def __hash__(self) -> int:
        return hash(self._nodes)

    def __repr__(self) -> str:
        return f"Scope({list(self._nodes)!r})"
