"""
Environment-driven settings for kendpoint-lib.

Environment variables:
- KUBECONFIG: kubeconfig search list (os.pathsep separated); first entry is used
- KENDPOINT_STORE_DIR: root directory of the file context store
- KENDPOINT_STORE: store backend, "file" (default) or "memory"
"""

import logging
import os
from pathlib import Path

from kendpoint_lib.any.exceptions import KEndpointConfigurationError

LOGGER = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = Path("~/.kube/config")
DEFAULT_STORE_DIR = Path("~/.kendpoint/contexts")
STORE_BACKENDS = ("file", "memory")


def default_kubeconfig_path() -> Path:
    """
    Get the kubeconfig path used when none is given explicitly.

    Returns:
    -------
        First non-empty entry of KUBECONFIG, else ~/.kube/config (user-expanded)

    """
    kubeconfig_env = os.environ.get("KUBECONFIG", "")
    for entry in kubeconfig_env.split(os.pathsep):
        if entry.strip():
            LOGGER.debug(f"Using kubeconfig from KUBECONFIG: {entry}")
            return Path(entry.strip()).expanduser()
    return DEFAULT_KUBECONFIG.expanduser()


def default_store_root() -> Path:
    """Get the file store root directory (KENDPOINT_STORE_DIR or ~/.kendpoint/contexts)."""
    store_dir = os.environ.get("KENDPOINT_STORE_DIR", "").strip()
    if store_dir:
        return Path(store_dir).expanduser()
    return DEFAULT_STORE_DIR.expanduser()


def store_backend() -> str:
    """
    Get the configured store backend.

    Raises
    ------
        KEndpointConfigurationError: If KENDPOINT_STORE names an unknown backend

    """
    backend = os.environ.get("KENDPOINT_STORE", "file").strip().lower() or "file"
    if backend not in STORE_BACKENDS:
        raise KEndpointConfigurationError(
            f"Invalid KENDPOINT_STORE value: '{backend}'. " f"Valid backends: {', '.join(STORE_BACKENDS)}"
        )
    return backend
