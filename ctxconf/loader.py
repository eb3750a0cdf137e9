"""
ctxconf.loader
--------------

Read and write configuration documents in their on-disk (kubeconfig) layout.

The property catalog doubles as the serialization table: every addressable
property is stored under its property name. Maps of entries are written as
named lists (``clusters: [{name: ..., cluster: {...}}]``), byte data as
base64 and empty values are omitted.

Supports YAML (default, kubeconfig files usually have no extension), JSON
and TOML files.
"""

import os
import json
import copy
import base64
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

import toml
import yaml

# Use tomli for reading TOML (falls back to the stdlib module on Python 3.11+)
try:
    import tomli
except ImportError:
    import tomllib as tomli

from .api import Config, ExecConfig
from .schema import FieldSpec, is_record_type, record_spec
from .utils import expand_path

log = logging.getLogger(__name__)

API_VERSION = "v1"
KIND = "Config"

# Map properties stored as lists of {"name": ..., <item key>: ...}
_NAMED_LISTS = {
    "clusters": "cluster",
    "contexts": "context",
    "users": "user",
    "extensions": "extension",
}

# Keys of the top-level document that are not properties
_ENVELOPE_KEYS = ("apiVersion", "kind")


# --- dict -> Config ---

def config_from_dict(data: Optional[Mapping]) -> Config:
    """
    Build a ``Config`` from its on-disk dictionary layout.

    Args:
        data: Parsed file content; ``None`` or empty gives an empty ``Config``.

    Returns:
        The populated document.

    Raises:
        RuntimeError: A section has the wrong shape or a named list repeats a name.
        TypeMismatch: A property value does not fit its declared type.
    """
    if not data:
        return Config()
    data = {k: v for k, v in data.items() if k not in _ENVELOPE_KEYS}
    return _record_from_dict(Config, data, "<root>")


def _record_from_dict(record_type: type, data: Any, where: str):
    if not isinstance(data, Mapping):
        raise RuntimeError(f"Expected a mapping at '{where}', got {type(data).__name__}")
    spec = record_spec(record_type)
    record = record_type()
    for key, raw in data.items():
        if record_type is ExecConfig and key == "env":
            record.env = [dict(item) for item in raw or []]
            continue
        if not spec.has(key):
            log.warning("Ignoring unknown key '%s' at '%s'", key, where)
            continue
        field = spec.lookup(key)
        field.write(record, _value_from_raw(field, raw, f"{where}.{field.name}"))
    return record


def _value_from_raw(field: FieldSpec, raw: Any, where: str) -> Any:
    kind = field.kind
    if raw is None:
        return kind.zero()
    if kind.is_record:
        return _record_from_dict(kind.record_type, raw, where)
    if kind.is_map:
        if field.name in _NAMED_LISTS:
            raw = _from_named_list(raw, _NAMED_LISTS[field.name], where)
        value_kind = kind.value_kind
        if value_kind.is_record:
            if not isinstance(raw, Mapping):
                raise RuntimeError(f"Expected a mapping at '{where}', got {type(raw).__name__}")
            return {
                name: _record_from_dict(value_kind.record_type, item or {}, f"{where}.{name}")
                for name, item in raw.items()
            }
    return kind.coerce(raw, where)


def _from_named_list(raw: Any, item_key: str, where: str) -> Dict[str, Any]:
    if isinstance(raw, Mapping):
        # Already keyed by name (e.g. hand-written JSON/TOML)
        return dict(raw)
    if not isinstance(raw, list):
        raise RuntimeError(f"Expected a list at '{where}', got {type(raw).__name__}")
    items = {}
    for entry in raw:
        if not isinstance(entry, Mapping) or "name" not in entry:
            raise RuntimeError(f"Entry without a name in '{where}': {entry!r}")
        name = str(entry["name"])
        if name in items:
            raise RuntimeError(f"Duplicate name '{name}' in '{where}'")
        items[name] = entry.get(item_key)
    return items


# --- Config -> dict ---

def config_to_dict(cfg: Config) -> dict:
    """Return the on-disk dictionary layout of ``cfg``."""
    body = _record_to_dict(cfg)
    out = {"apiVersion": API_VERSION, "kind": KIND}
    # kubeconfig always writes these, even when empty
    for name in ("preferences", "clusters", "contexts", "current-context", "users"):
        out[name] = body.pop(name, _empty_section(name))
    out.update(body)
    return out


def _empty_section(name: str) -> Any:
    if name == "preferences":
        return {}
    if name == "current-context":
        return ""
    return []


def _record_to_dict(record: Any) -> dict:
    spec = record_spec(type(record))
    out = {}
    for field in spec.fields.values():
        value = field.read(record)
        if value is None or value == field.kind.zero():
            continue
        out[field.name] = _value_to_raw(field, value)
    if isinstance(record, ExecConfig) and record.env:
        out["env"] = copy.deepcopy(record.env)
    return out


def _value_to_raw(field: FieldSpec, value: Any) -> Any:
    kind = field.kind
    if kind.is_record:
        return _record_to_dict(value)
    if kind.is_map:
        value_kind = kind.value_kind
        if value_kind.is_record:
            items = {name: _record_to_dict(item) for name, item in value.items()}
        else:
            items = copy.deepcopy(dict(value))
        if field.name in _NAMED_LISTS:
            item_key = _NAMED_LISTS[field.name]
            return [{"name": name, item_key: item} for name, item in items.items()]
        return items
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, list):
        return list(value)
    return value


# --- Files ---

def detect_format(file_path: str) -> str:
    """Return ``"json"``, ``"toml"`` or ``"yaml"`` based on the file extension."""
    ext = os.path.splitext(file_path)[1].lower()
    if ext == ".json":
        return "json"
    if ext == ".toml":
        return "toml"
    return "yaml"


def dumps(data: dict, fmt: str) -> str:
    """Serialize an on-disk dictionary in the given format."""
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "toml":
        return toml.dumps(data)
    if fmt == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    raise ValueError(f"Unsupported output format: {fmt}")


def load_config(file_path: str) -> Config:
    """
    Load a configuration document from disk.

    A missing file is not an error and yields an empty ``Config``.

    Raises:
        RuntimeError: The file cannot be read or parsed, or has the wrong shape.
    """
    file_path = expand_path(file_path)
    if not os.path.exists(file_path):
        log.debug("Config file %s does not exist, starting from an empty config.", file_path)
        return Config()

    fmt = detect_format(file_path)
    try:
        if fmt == "toml":
            with open(file_path, mode="rb") as f:
                data = tomli.load(f)
        elif fmt == "json":
            with open(file_path, mode="r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(file_path, mode="r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        cfg = config_from_dict(data)
    except Exception as e:
        raise RuntimeError(f"Error loading/parsing file {file_path}: {e}") from e

    for entries in (cfg.clusters, cfg.contexts, cfg.auth_infos):
        for entry in entries.values():
            entry.location_of_origin = file_path
    log.debug("Loaded %s: %d cluster(s), %d context(s), %d user(s)", file_path,
              len(cfg.clusters), len(cfg.contexts), len(cfg.auth_infos))
    return cfg


def save_config(cfg: Config, file_path: str) -> None:
    """Write ``cfg`` to ``file_path`` in the format its extension implies."""
    file_path = expand_path(file_path)
    text = dumps(config_to_dict(cfg), detect_format(file_path))
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(file_path, mode="w", encoding="utf-8") as f:
        f.write(text)
    log.debug("Wrote config to %s", file_path)


def to_plain(value: Any) -> Any:
    """
    Convert a document value (record, map, bytes, ...) into plain JSON-able data.

    Maps are kept keyed by name rather than turned into named lists.
    """
    if isinstance(value, Config):
        return config_to_dict(value)
    if is_record_type(type(value)):
        return _record_to_dict(value)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return copy.deepcopy(value)
