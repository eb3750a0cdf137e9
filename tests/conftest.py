import pytest

from ctxconf.api import AuthInfo, Cluster, Config, Context, Preferences


@pytest.fixture
def sample_config():
    """Two clusters, one context, one user, a current context and preferences."""
    return Config(
        clusters={
            "a": Cluster(server="https://a.example.com"),
            "b": Cluster(server="https://b.example.com", insecure_skip_tls_verify=True),
        },
        contexts={"c1": Context(cluster="a", auth_info="u1", namespace="default")},
        auth_infos={"u1": AuthInfo(token="secret")},
        current_context="c1",
        preferences=Preferences(colors=True, extensions={"e1": {"theme": "dark"}}),
    )
