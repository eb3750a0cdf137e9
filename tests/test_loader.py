import json
import logging

import pytest
import yaml

from ctxconf.api import AuthInfo, AuthProviderConfig, Cluster, Config, ExecConfig
from ctxconf.loader import (
    config_from_dict,
    config_to_dict,
    detect_format,
    load_config,
    save_config,
    to_plain,
)

KUBECONFIG_YAML = """\
apiVersion: v1
kind: Config
preferences:
  colors: true
clusters:
- name: prod
  cluster:
    server: https://prod.example.com
    certificate-authority-data: aGVsbG8=
- name: 10.0.0.1
  cluster:
    server: https://10.0.0.1
    insecure-skip-tls-verify: true
contexts:
- name: prod-admin
  context:
    cluster: prod
    user: admin
    namespace: default
current-context: prod-admin
users:
- name: admin
  user:
    token: abc
    as-groups:
    - dev
    exec:
      command: get-token
      args: [--verbose]
      env:
      - name: REGION
        value: eu
"""


@pytest.fixture
def yaml_cfg(tmp_path):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG_YAML)
    return str(path)


@pytest.fixture
def full_config():
    return Config(
        clusters={"prod": Cluster(server="https://p", certificate_authority_data=b"\x00ca")},
        auth_infos={"admin": AuthInfo(
            token="t",
            auth_provider=AuthProviderConfig(name="oidc", config={"client-id": "x"}),
            exec=ExecConfig(command="c", env=[{"name": "A", "value": "1"}]),
        )},
        current_context="",
        extensions={"ext": {"k": "v"}},
    )


def test_load_yaml(yaml_cfg):
    cfg = load_config(yaml_cfg)
    assert cfg.current_context == "prod-admin"
    assert cfg.preferences.colors is True
    assert cfg.clusters["prod"].certificate_authority_data == b"hello"
    assert cfg.clusters["10.0.0.1"].insecure_skip_tls_verify is True
    assert cfg.contexts["prod-admin"].auth_info == "admin"
    user = cfg.auth_infos["admin"]
    assert user.impersonate_groups == ["dev"]
    assert user.exec.args == ["--verbose"]
    assert user.exec.env == [{"name": "REGION", "value": "eu"}]


def test_location_of_origin(yaml_cfg):
    cfg = load_config(yaml_cfg)
    assert cfg.clusters["prod"].location_of_origin == yaml_cfg
    assert "location" not in json.dumps(config_to_dict(cfg))


def test_missing_file_is_empty(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == Config()


def test_empty_file_is_empty(tmp_path):
    path = tmp_path / "config"
    path.write_text("")
    assert load_config(str(path)) == Config()


def test_malformed_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{invalid json")
    with pytest.raises(RuntimeError):
        load_config(str(path))


def test_duplicate_names(tmp_path):
    path = tmp_path / "dup.yaml"
    path.write_text("clusters:\n- name: a\n  cluster: {}\n- name: a\n  cluster: {}\n")
    with pytest.raises(RuntimeError, match="Duplicate"):
        load_config(str(path))


def test_bad_value_type(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("preferences:\n  colors: maybe\n")
    with pytest.raises(RuntimeError):
        load_config(str(path))


def test_unknown_keys_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="ctxconf.loader"):
        cfg = config_from_dict({"current-context": "x", "mystery": 1})
    assert cfg.current_context == "x"
    assert "mystery" in caplog.text


def test_to_dict_layout(full_config):
    data = config_to_dict(full_config)
    assert data["apiVersion"] == "v1"
    assert data["kind"] == "Config"
    assert data["current-context"] == ""
    assert data["contexts"] == []
    assert data["clusters"] == [
        {"name": "prod", "cluster": {"server": "https://p", "certificate-authority-data": "AGNh"}},
    ]
    assert data["extensions"] == [{"name": "ext", "extension": {"k": "v"}}]
    assert data["users"][0]["user"]["auth-provider"] == {"name": "oidc", "config": {"client-id": "x"}}


def _reload(path):
    cfg = load_config(path)
    for entries in (cfg.clusters, cfg.contexts, cfg.auth_infos):
        for entry in entries.values():
            entry.location_of_origin = ""
    return cfg


@pytest.mark.parametrize("filename", ["config", "config.yaml", "config.json"])
def test_save_and_reload(tmp_path, full_config, filename):
    path = str(tmp_path / "nested" / filename)
    save_config(full_config, path)
    assert _reload(path) == full_config


def test_save_and_reload_toml(tmp_path):
    cfg = Config(
        clusters={"prod": Cluster(server="https://p", insecure_skip_tls_verify=True)},
        auth_infos={"admin": AuthInfo(token="t", impersonate_groups=["dev"])},
        current_context="prod",
    )
    cfg.preferences.colors = True
    path = str(tmp_path / "config.toml")
    save_config(cfg, path)
    assert _reload(path) == cfg


def test_saved_yaml_is_kubeconfig(tmp_path, full_config):
    path = tmp_path / "config"
    save_config(full_config, str(path))
    data = yaml.safe_load(path.read_text())
    assert data["clusters"][0]["name"] == "prod"


def test_detect_format():
    assert detect_format("a.json") == "json"
    assert detect_format("a.TOML") == "toml"
    assert detect_format("/home/u/.kube/config") == "yaml"


def test_to_plain(full_config):
    assert to_plain(full_config.clusters["prod"]) == {
        "server": "https://p", "certificate-authority-data": "AGNh",
    }
    assert to_plain(full_config.clusters) == {
        "prod": {"server": "https://p", "certificate-authority-data": "AGNh"},
    }
    assert to_plain(b"hello") == "aGVsbG8="
    assert to_plain(["a"]) == ["a"]
