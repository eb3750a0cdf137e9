"""
ctxconf.steps
-------------

Parse dotted property paths into navigation steps.

A path such as ``clusters.prod.server`` becomes three steps: the record
property ``clusters``, the map key ``prod`` and the record property
``server``. Segments are checked positionally against the property catalog
in ``ctxconf.schema``. Map keys are opaque and may themselves contain dots
(``clusters.10.0.0.1.server``): the key runs up to the first later segment
that names a property of the entry record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .exceptions import EmptySegment, PathTooDeep, UnknownProperty
from .schema import ROOT, Kind

SEPARATOR = "."


@dataclass(frozen=True)
class NavigationStep:
    """A single descend operation: a property name or map key, and its position."""

    name: str
    index: int


def parse_path(path: str) -> Tuple[NavigationStep, ...]:
    """
    Convert a dotted path into an ordered tuple of navigation steps.

    Args:
        path: Property path, e.g. ``"preferences.colors"``.

    Returns:
        Steps in path order. Parsing the same string always yields an equal tuple.

    Raises:
        EmptySegment: The path is empty or has a leading, trailing or doubled separator.
        UnknownProperty: A segment does not name a property of its record.
        PathTooDeep: The path continues past a scalar property.
    """
    parts = path.split(SEPARATOR)
    if not all(parts):
        raise EmptySegment(path)

    names = []
    kind: Kind = ROOT
    i = 0
    while i < len(parts):
        if kind.is_record:
            field = kind.spec.lookup(parts[i], path)
            names.append(parts[i])
            kind = field.kind
            i += 1
        elif kind.is_map:
            size = _key_length(parts[i:], kind.value_kind, path)
            names.append(SEPARATOR.join(parts[i:i + size]))
            kind = kind.value_kind
            i += size
        else:
            raise PathTooDeep(names[-1], path)

    return tuple(NavigationStep(name, index) for index, name in enumerate(names))


def _key_length(parts: list, value_kind: Kind, path: str) -> int:
    """Number of segments making up the map key at the head of ``parts``."""
    if not value_kind.is_record:
        # Values are opaque, nothing below them can be checked.
        return len(parts)

    spec = value_kind.spec
    for offset in range(1, len(parts)):
        if spec.has(parts[offset]):
            return offset
    if len(parts) > 1:
        raise UnknownProperty(parts[1], spec.names(), path)
    return 1


def format_path(steps: Iterable[NavigationStep]) -> str:
    """Join steps back into a dotted path."""
    return SEPARATOR.join(step.name for step in steps)
