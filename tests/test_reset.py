# tests/test_reset.py
"""
Tests for resetting a whole document.
"""

from ctxconf.api import Config, Preferences
from ctxconf.reset import (
    DeletedConfigs,
    delete_primary_configs,
    reset_config,
    unset_current_context,
    unset_preferences,
)


def test_unset_current_context(sample_config):
    unset_current_context(sample_config)
    assert sample_config.current_context == ""
    assert set(sample_config.contexts) == {"c1"}


def test_unset_preferences(sample_config):
    unset_preferences(sample_config)
    assert sample_config.preferences == Preferences(colors=False, extensions={})


def test_delete_primary_configs(sample_config):
    deleted = delete_primary_configs(sample_config)
    assert sorted(deleted.clusters) == ["a", "b"]
    assert deleted.contexts == ["c1"]
    assert deleted.users == ["u1"]
    assert sample_config.clusters == {}
    assert sample_config.contexts == {}
    assert sample_config.auth_infos == {}
    # Only the three entry maps are touched
    assert sample_config.current_context == "c1"
    assert sample_config.preferences.colors is True


def test_reset_config(sample_config):
    """Everything ends up empty and the removed names are reported."""
    deleted = reset_config(sample_config)

    assert sample_config.current_context == ""
    assert sample_config.preferences.colors is False
    assert sample_config.preferences.extensions == {}
    assert sample_config.clusters == {}
    assert sample_config.contexts == {}
    assert sample_config.auth_infos == {}

    assert sorted(deleted.clusters) == ["a", "b"]
    assert sorted(deleted.contexts) == ["c1"]
    assert sorted(deleted.users) == ["u1"]


def test_reset_empty_config():
    cfg = Config()
    assert reset_config(cfg) == DeletedConfigs()
    assert cfg == Config()
