"""
KEndpoint configuration: kubeconfig schemas, loading and settings.

The resolver that turns a kubeconfig into an Endpoint lives in
kendpoint_lib.config.resolver and is re-exported from kendpoint_lib.
"""

from kendpoint_lib.config.loaders import load_kubeconfig, parse_kubeconfig, read_file_or_data
from kendpoint_lib.config.schemas import (
    AuthProviderConfig,
    ExecConfig,
    KubeCluster,
    KubeConfig,
    KubeContext,
    KubeUser,
    UsernamePassword,
)
from kendpoint_lib.config.settings import default_kubeconfig_path, default_store_root, store_backend

__all__ = [
    # Schemas
    "AuthProviderConfig",
    "ExecConfig",
    "KubeCluster",
    "KubeConfig",
    "KubeContext",
    "KubeUser",
    "UsernamePassword",
    # Loaders
    "load_kubeconfig",
    "parse_kubeconfig",
    "read_file_or_data",
    # Settings
    "default_kubeconfig_path",
    "default_store_root",
    "store_backend",
]
