"""
ctxconf.navigator
-----------------

Walk a configuration document along parsed navigation steps.

Each position in the document is wrapped in a node whose class tells how
the next step is resolved:

- ``RecordNode``: fixed-shape record, the step names a property
  (case-insensitive).
- ``MapNode``: dynamically-keyed map, the step is a literal key. Absent
  keys are created on demand when ``create`` is set.
- ``ScalarNode``: leaf value, nothing can be resolved below it.

Nodes wrap the live objects, so whatever is done through them changes the
caller's document in place.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .exceptions import PathTooDeep
from .schema import ROOT, Kind, MapKind, RecordKind
from .steps import NavigationStep


class Node:
    """Common interface of the three node variants."""

    def __init__(self, value: Any, kind: Kind, name: str = ""):
        self.value = value
        self.kind = kind
        self.name = name

    def descend(self, name: str, create: bool = False, path: Optional[str] = None) -> Optional["Node"]:
        """Return the child node for ``name``, or ``None`` when it is absent."""
        raise NotImplementedError

    def assign(self, name: str, value: Any, raw_bytes: bool = False, path: Optional[str] = None) -> None:
        """Store ``value`` (coerced to the declared kind) under ``name``."""
        raise NotImplementedError

    def clear(self, name: str, path: Optional[str] = None) -> None:
        """Unset ``name``: zero a record property or drop a map entry."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.kind!r})"


class RecordNode(Node):
    kind: RecordKind

    def descend(self, name, create=False, path=None):
        field = self.kind.spec.lookup(name, path)
        value = field.read(self.value)
        if value is None and field.kind.is_record:
            if not create:
                return None
            value = field.kind.new()
            field.write(self.value, value)
        return node_for(value, field.kind, field.name)

    def assign(self, name, value, raw_bytes=False, path=None):
        field = self.kind.spec.lookup(name, path)
        field.write(self.value, field.kind.coerce(value, path, raw_bytes))

    def clear(self, name, path=None):
        field = self.kind.spec.lookup(name, path)
        field.write(self.value, field.kind.zero())


class MapNode(Node):
    kind: MapKind

    def descend(self, name, create=False, path=None):
        value_kind = self.kind.value_kind
        if name in self.value:
            return node_for(self.value[name], value_kind, name)
        if not create:
            return None
        if not value_kind.is_container:
            # A new scalar entry could never be descended into.
            raise PathTooDeep(name, path)
        entry = value_kind.new()
        self.value[name] = entry
        return node_for(entry, value_kind, name)

    def assign(self, name, value, raw_bytes=False, path=None):
        self.value[name] = self.kind.value_kind.coerce(value, path, raw_bytes)

    def clear(self, name, path=None):
        self.value.pop(name, None)


class ScalarNode(Node):

    def descend(self, name, create=False, path=None):
        raise PathTooDeep(self.name, path)

    def assign(self, name, value, raw_bytes=False, path=None):
        raise PathTooDeep(self.name, path)

    def clear(self, name, path=None):
        raise PathTooDeep(self.name, path)


def node_for(value: Any, kind: Kind, name: str = "") -> Node:
    """Wrap ``value`` in the node variant matching ``kind``."""
    if kind.is_record:
        return RecordNode(value, kind, name)
    if kind.is_map:
        return MapNode(value, kind, name)
    return ScalarNode(value, kind, name)


def resolve(root: Any, steps: Iterable[NavigationStep], create: bool = False,
            path: Optional[str] = None) -> Optional[Node]:
    """
    Follow ``steps`` from the document root.

    Args:
        root: The ``Config`` document.
        steps: Steps from ``parse_path`` or built by hand.
        create: Insert missing map entries and optional sub-records on the way.
        path: Dotted path used in error messages.

    Returns:
        The node at the end of the steps, or ``None`` if an absent map key or
        optional sub-record was met while ``create`` was off.

    Raises:
        UnknownProperty: A step does not name a property of its record.
        PathTooDeep: A step goes below a scalar.
    """
    if not isinstance(root, ROOT.record_type):
        raise TypeError(f"Expected a {ROOT.label} document, got {type(root).__name__}")
    node: Optional[Node] = node_for(root, ROOT)
    for step in steps:
        node = node.descend(step.name, create, path)
        if node is None:
            return None
    return node
