"""
ctxconf.schema
--------------

Immutable catalog of addressable properties.

Every record type of ``ctxconf.api`` gets one ``RecordSpec``: a table from
lower-cased property name to a ``FieldSpec`` that knows the attribute it
reads and writes and the ``Kind`` of value stored there. Kinds describe the
three node shapes the navigator distinguishes (record, map, scalar) and how
an incoming value is coerced into a field.

The tables are built once at import time and exposed read-only, so they
can be shared freely between calls.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .api import (
    AuthInfo,
    AuthProviderConfig,
    Cluster,
    Config,
    Context,
    ExecConfig,
    Preferences,
)
from .exceptions import TypeMismatch, UnknownProperty

# Same spellings strconv.ParseBool accepts, which kubeconfig tooling follows.
TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


# --- Value kinds ---

class Kind:
    """Base kind: any value, zero is ``None``."""

    label = "any"
    is_record = False
    is_map = False

    @property
    def is_container(self) -> bool:
        return self.is_record or self.is_map

    def zero(self) -> Any:
        """Value a field of this kind holds after an unset."""
        return None

    def new(self) -> Any:
        """Fresh value used when a path auto-creates an entry."""
        return self.zero()

    def coerce(self, value: Any, path: str | None = None, raw_bytes: bool = False) -> Any:
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AnyKind(Kind):
    pass


class StringKind(Kind):
    label = "string"

    def zero(self) -> str:
        return ""

    def coerce(self, value, path=None, raw_bytes=False):
        if not isinstance(value, str):
            raise TypeMismatch(self.label, value, path)
        return value


class BoolKind(Kind):
    label = "boolean"

    def zero(self) -> bool:
        return False

    def coerce(self, value, path=None, raw_bytes=False):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if value in TRUE_STRINGS:
                return True
            if value in FALSE_STRINGS:
                return False
        raise TypeMismatch(self.label, value, path)


class BytesKind(Kind):
    """
    Raw byte data such as embedded certificates.

    Strings are base64-decoded unless ``raw_bytes`` is set, in which case
    they are stored as their UTF-8 encoding.
    """

    label = "bytes"

    def zero(self) -> bytes:
        return b""

    def coerce(self, value, path=None, raw_bytes=False):
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, str):
            if raw_bytes:
                return value.encode("utf-8")
            try:
                return base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as e:
                raise TypeMismatch("base64 " + self.label, value, path) from e
        raise TypeMismatch(self.label, value, path)


class StringListKind(Kind):
    label = "string list"

    def zero(self) -> list:
        return []

    def coerce(self, value, path=None, raw_bytes=False):
        if isinstance(value, str):
            return value.split(",") if value else []
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return list(value)
        raise TypeMismatch(self.label, value, path)


class RecordKind(Kind):
    """
    A fixed-shape record. ``optional`` records are ``None`` until a set
    reaches through them, and go back to ``None`` when unset.
    """

    is_record = True

    def __init__(self, record_type: type, optional: bool = False):
        self.record_type = record_type
        self.optional = optional
        self.label = record_type.__name__

    @property
    def spec(self) -> "RecordSpec":
        return record_spec(self.record_type)

    def zero(self):
        return None if self.optional else self.record_type()

    def new(self):
        return self.record_type()

    def coerce(self, value, path=None, raw_bytes=False):
        if not isinstance(value, self.record_type):
            raise TypeMismatch(self.label, value, path)
        return value

    def __repr__(self) -> str:
        return f"RecordKind({self.label}, optional={self.optional})"


class MapKind(Kind):
    """A dynamically-keyed map; keys are strings, values are ``value_kind``."""

    is_map = True

    def __init__(self, value_kind: Kind):
        self.value_kind = value_kind
        self.label = f"map of {value_kind.label}"

    def zero(self) -> dict:
        return {}

    def coerce(self, value, path=None, raw_bytes=False):
        if not isinstance(value, Mapping):
            raise TypeMismatch(self.label, value, path)
        coerced = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeMismatch(self.label, value, path)
            coerced[key] = self.value_kind.coerce(item, path, raw_bytes)
        return coerced

    def __repr__(self) -> str:
        return f"MapKind({self.value_kind!r})"


# --- Property tables ---

@dataclass(frozen=True)
class FieldSpec:
    """One addressable property: accessor/mutator pair for ``attr``."""

    name: str
    attr: str
    kind: Kind

    def read(self, record: Any) -> Any:
        return getattr(record, self.attr)

    def write(self, record: Any, value: Any) -> None:
        setattr(record, self.attr, value)


@dataclass(frozen=True)
class RecordSpec:
    record_type: type
    fields: Mapping[str, FieldSpec]

    def lookup(self, name: str, path: str | None = None) -> FieldSpec:
        """Find a property case-insensitively; raise ``UnknownProperty`` if absent."""
        spec = self.fields.get(name.lower())
        if spec is None:
            raise UnknownProperty(name, self.names(), path)
        return spec

    def has(self, name: str) -> bool:
        return name.lower() in self.fields

    def names(self) -> list:
        return [f.name for f in self.fields.values()]


def _record(record_type: type, *fields: FieldSpec) -> RecordSpec:
    return RecordSpec(record_type, MappingProxyType({f.name.lower(): f for f in fields}))


STRING = StringKind()
BOOL = BoolKind()
BYTES = BytesKind()
STRING_LIST = StringListKind()
ANY = AnyKind()
EXTENSIONS = MapKind(ANY)

ROOT = RecordKind(Config)

_CATALOG = MappingProxyType({
    Config: _record(
        Config,
        FieldSpec("preferences", "preferences", RecordKind(Preferences)),
        FieldSpec("clusters", "clusters", MapKind(RecordKind(Cluster))),
        FieldSpec("users", "auth_infos", MapKind(RecordKind(AuthInfo))),
        FieldSpec("contexts", "contexts", MapKind(RecordKind(Context))),
        FieldSpec("current-context", "current_context", STRING),
        FieldSpec("extensions", "extensions", EXTENSIONS),
    ),
    Preferences: _record(
        Preferences,
        FieldSpec("colors", "colors", BOOL),
        FieldSpec("extensions", "extensions", EXTENSIONS),
    ),
    Cluster: _record(
        Cluster,
        FieldSpec("server", "server", STRING),
        FieldSpec("tls-server-name", "tls_server_name", STRING),
        FieldSpec("insecure-skip-tls-verify", "insecure_skip_tls_verify", BOOL),
        FieldSpec("certificate-authority", "certificate_authority", STRING),
        FieldSpec("certificate-authority-data", "certificate_authority_data", BYTES),
        FieldSpec("proxy-url", "proxy_url", STRING),
        FieldSpec("disable-compression", "disable_compression", BOOL),
        FieldSpec("extensions", "extensions", EXTENSIONS),
    ),
    Context: _record(
        Context,
        FieldSpec("cluster", "cluster", STRING),
        FieldSpec("user", "auth_info", STRING),
        FieldSpec("namespace", "namespace", STRING),
        FieldSpec("extensions", "extensions", EXTENSIONS),
    ),
    AuthInfo: _record(
        AuthInfo,
        FieldSpec("client-certificate", "client_certificate", STRING),
        FieldSpec("client-certificate-data", "client_certificate_data", BYTES),
        FieldSpec("client-key", "client_key", STRING),
        FieldSpec("client-key-data", "client_key_data", BYTES),
        FieldSpec("token", "token", STRING),
        FieldSpec("tokenFile", "token_file", STRING),
        FieldSpec("as", "impersonate", STRING),
        FieldSpec("as-uid", "impersonate_uid", STRING),
        FieldSpec("as-groups", "impersonate_groups", STRING_LIST),
        FieldSpec("as-user-extra", "impersonate_user_extra", MapKind(STRING_LIST)),
        FieldSpec("username", "username", STRING),
        FieldSpec("password", "password", STRING),
        FieldSpec("auth-provider", "auth_provider", RecordKind(AuthProviderConfig, optional=True)),
        FieldSpec("exec", "exec", RecordKind(ExecConfig, optional=True)),
        FieldSpec("extensions", "extensions", EXTENSIONS),
    ),
    AuthProviderConfig: _record(
        AuthProviderConfig,
        FieldSpec("name", "name", STRING),
        FieldSpec("config", "config", MapKind(STRING)),
    ),
    ExecConfig: _record(
        ExecConfig,
        FieldSpec("command", "command", STRING),
        FieldSpec("args", "args", STRING_LIST),
        FieldSpec("apiVersion", "api_version", STRING),
        FieldSpec("installHint", "install_hint", STRING),
        FieldSpec("provideClusterInfo", "provide_cluster_info", BOOL),
        FieldSpec("interactiveMode", "interactive_mode", STRING),
    ),
})


def record_spec(record_type: type) -> RecordSpec:
    """Return the property table for a record type of ``ctxconf.api``."""
    try:
        return _CATALOG[record_type]
    except KeyError:
        raise TypeError(f"{record_type.__name__} is not an addressable record type") from None


def top_level_names() -> list:
    return record_spec(Config).names()


def is_record_type(record_type: type) -> bool:
    return record_type in _CATALOG
