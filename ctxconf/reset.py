"""
ctxconf.reset
-------------

Reset a configuration document to an empty state.

The current context and the preferences are unset through the property
path engine; clusters, contexts and users are removed by clearing their
maps directly, and the removed names are reported back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .api import Config
from .mutator import unset_property

log = logging.getLogger(__name__)

CURRENT_CONTEXT_PROPERTY = "current-context"
PREFERENCES_COLORS_PROPERTY = "preferences.colors"
PREFERENCES_EXTENSIONS_PROPERTY = "preferences.extensions"


@dataclass
class DeletedConfigs:
    """Names removed by ``delete_primary_configs``, in iteration order."""

    clusters: List[str] = field(default_factory=list)
    contexts: List[str] = field(default_factory=list)
    users: List[str] = field(default_factory=list)


def unset_current_context(cfg: Config) -> None:
    unset_property(cfg, CURRENT_CONTEXT_PROPERTY)
    log.debug("Unset %s", CURRENT_CONTEXT_PROPERTY)


def unset_preferences(cfg: Config) -> None:
    for prop in (PREFERENCES_COLORS_PROPERTY, PREFERENCES_EXTENSIONS_PROPERTY):
        unset_property(cfg, prop)
        log.debug("Unset %s", prop)


def delete_primary_configs(cfg: Config) -> DeletedConfigs:
    """Remove every cluster, context and user entry from ``cfg``."""
    deleted = DeletedConfigs()
    for mapping, names in (
        (cfg.clusters, deleted.clusters),
        (cfg.contexts, deleted.contexts),
        (cfg.auth_infos, deleted.users),
    ):
        # Iterate over a snapshot of the keys since entries are removed as we go.
        for name in list(mapping):
            del mapping[name]
            names.append(name)
    log.debug("Deleted clusters=%s contexts=%s users=%s",
              deleted.clusters, deleted.contexts, deleted.users)
    return deleted


def reset_config(cfg: Config) -> DeletedConfigs:
    """Unset the current context and preferences, then delete all entries."""
    unset_current_context(cfg)
    unset_preferences(cfg)
    return delete_primary_configs(cfg)
