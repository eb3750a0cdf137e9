"""
ctxconf.api
-----------

In-memory model of a context configuration document.

Entries are plain mutable dataclasses owned by the caller. The property
names used to address them in paths live in ``ctxconf.schema``; the
on-disk layout lives in ``ctxconf.loader``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Cluster:
    """Connection details for one cluster."""

    server: str = ""
    tls_server_name: str = ""
    insecure_skip_tls_verify: bool = False
    certificate_authority: str = ""
    certificate_authority_data: bytes = b""
    proxy_url: str = ""
    disable_compression: bool = False
    extensions: dict[str, Any] = field(default_factory=dict)
    # Set by the loader, never addressable or persisted.
    location_of_origin: str = ""


@dataclass
class Context:
    """A (cluster, user, namespace) triple referenced by name."""

    cluster: str = ""
    auth_info: str = ""
    namespace: str = ""
    extensions: dict[str, Any] = field(default_factory=dict)
    location_of_origin: str = ""


@dataclass
class AuthProviderConfig:
    name: str = ""
    config: dict[str, str] = field(default_factory=dict)


@dataclass
class ExecConfig:
    command: str = ""
    args: list[str] = field(default_factory=list)
    # List of {"name": ..., "value": ...}; carried through load/save only.
    env: list[dict[str, str]] = field(default_factory=list)
    api_version: str = ""
    install_hint: str = ""
    provide_cluster_info: bool = False
    interactive_mode: str = ""


@dataclass
class AuthInfo:
    """Credentials for one user."""

    client_certificate: str = ""
    client_certificate_data: bytes = b""
    client_key: str = ""
    client_key_data: bytes = b""
    token: str = ""
    token_file: str = ""
    impersonate: str = ""
    impersonate_uid: str = ""
    impersonate_groups: list[str] = field(default_factory=list)
    impersonate_user_extra: dict[str, list[str]] = field(default_factory=dict)
    username: str = ""
    password: str = ""
    auth_provider: Optional[AuthProviderConfig] = None
    exec: Optional[ExecConfig] = None
    extensions: dict[str, Any] = field(default_factory=dict)
    location_of_origin: str = ""


@dataclass
class Preferences:
    colors: bool = False
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class Config:
    """
    Root of a context configuration document.

    ``auth_infos`` is addressed as ``users`` in property paths, matching the
    on-disk key.
    """

    preferences: Preferences = field(default_factory=Preferences)
    clusters: dict[str, Cluster] = field(default_factory=dict)
    auth_infos: dict[str, AuthInfo] = field(default_factory=dict)
    contexts: dict[str, Context] = field(default_factory=dict)
    current_context: str = ""
    extensions: dict[str, Any] = field(default_factory=dict)
