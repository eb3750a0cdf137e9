"""
ctxconf.mutator
---------------

Get, set and unset properties of a configuration document by path.

Changes are applied directly to the caller's document. There is no
snapshot or rollback: a set that fails at the leaf keeps any map entries
it created on the way down. Callers that need all-or-nothing behaviour
should ``copy.deepcopy`` the document first and restore it on error.
"""

from __future__ import annotations

from typing import Any, Sequence

from .exceptions import EmptySegment
from .navigator import resolve
from .steps import NavigationStep, format_path, parse_path


def modify(root: Any, steps: Sequence[NavigationStep], value: Any = None,
           unset: bool = False, raw_bytes: bool = False) -> None:
    """
    Set or unset the property addressed by ``steps``.

    On unset, a missing map entry anywhere along the path is a no-op; the
    final step either zeroes a record property or deletes a map entry. On
    set, missing map entries are created along the path and ``value`` is
    coerced to the declared type of the target.

    Args:
        root: The ``Config`` document, modified in place.
        steps: Parsed path.
        value: New value (ignored when ``unset``).
        unset: Unset instead of set.
        raw_bytes: Store strings assigned to byte properties as UTF-8
            instead of base64-decoding them.

    Raises:
        EmptySegment: ``steps`` is empty.
        UnknownProperty, PathTooDeep: The steps do not fit the document.
        TypeMismatch: ``value`` does not fit the target property.
    """
    steps = tuple(steps)
    if not steps:
        raise EmptySegment("")
    path = format_path(steps)

    parent = resolve(root, steps[:-1], create=not unset, path=path)
    if parent is None:
        return

    leaf = steps[-1].name
    if unset:
        parent.clear(leaf, path)
    else:
        parent.assign(leaf, value, raw_bytes, path)


def get(root: Any, steps: Sequence[NavigationStep], default: Any = None) -> Any:
    """Return the value addressed by ``steps``, or ``default`` if it is absent."""
    steps = tuple(steps)
    node = resolve(root, steps, path=format_path(steps))
    return default if node is None else node.value


def get_property(root: Any, path: str, default: Any = None) -> Any:
    return get(root, parse_path(path), default)


def set_property(root: Any, path: str, value: Any, raw_bytes: bool = False) -> None:
    modify(root, parse_path(path), value, raw_bytes=raw_bytes)


def unset_property(root: Any, path: str) -> None:
    modify(root, parse_path(path), unset=True)
