# ctxconf/__init__.py
"""
ctxconf – Edit context configuration (kubeconfig) documents by property path.

Parse a dotted path with ``ctxconf.steps.parse_path`` and apply it with
``ctxconf.mutator.modify``, or use ``get_property`` / ``set_property`` /
``unset_property`` from ``ctxconf.mutator`` directly. Documents are the
dataclasses in ``ctxconf.api``; ``ctxconf.loader`` reads and writes them.

Errors live in ``ctxconf.exceptions``: ``EmptySegment``, ``UnknownProperty``,
``PathTooDeep`` and ``TypeMismatch``, all subclasses of ``PathError``.
"""

__version__ = "0.1.0"
