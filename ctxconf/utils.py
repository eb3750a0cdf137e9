"""
ctxconf.utils
-------------

Path handling and environment helpers shared by the loader and the CLI.
"""

import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

log = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"
DEFAULT_CONFIG_PATH = "~/.kube/config"


def expand_path(path: Optional[str]) -> Optional[str]:
    """Expand ~ and environment variables in a path string.

    Args:
        path: Path string to expand, or None.

    Returns:
        Expanded path string, or None if input was None.

    Examples:
        >>> expand_path("~/.kube/config")
        '/home/user/.kube/config'
        >>> expand_path(None)
        None
    """
    if path is None:
        return None
    return os.path.expandvars(os.path.expanduser(path))


def resolve_path(path: Optional[str]) -> Optional[Path]:
    """Expand and resolve a path to an absolute Path object."""
    expanded = expand_path(path)
    if expanded is None:
        return None
    return Path(expanded).resolve()


def load_environment(dotenv_path: Optional[str] = None) -> bool:
    """Load a .env file into os.environ without overriding existing variables.

    Args:
        dotenv_path: Explicit .env file. When omitted, the nearest .env
            file from the working directory upwards is used, if any.

    Returns:
        True if a file was found and loaded.
    """
    actual_path = expand_path(dotenv_path) if dotenv_path else find_dotenv(usecwd=True)
    if not actual_path or not os.path.exists(actual_path):
        if dotenv_path:
            log.warning("Warning: .env file %s not found.", dotenv_path)
        return False
    loaded = load_dotenv(dotenv_path=actual_path, override=False)
    log.debug("Loaded .env file from %s (changed environment: %s)", actual_path, loaded)
    return True


def default_config_path() -> str:
    """Return the config file to use when none is given explicitly.

    The first entry of ``$KUBECONFIG`` wins; otherwise ``~/.kube/config``.
    """
    env_value = os.environ.get(KUBECONFIG_ENV, "")
    for candidate in env_value.split(os.pathsep):
        if candidate:
            return expand_path(candidate)
    return expand_path(DEFAULT_CONFIG_PATH)
