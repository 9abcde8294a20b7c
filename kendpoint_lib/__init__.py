"""
KEndpoint Library - Kubernetes context endpoints for multi-cluster tooling.

This library normalizes kubeconfig contexts into persistable endpoints:
- Config Resolver: kubeconfig + context selector → Endpoint
- Split storage: non-secret metadata and secret TLS material live in separate stores
- Client Config Builder: Endpoint → client configuration, with auth-provider and
  exec plugins passed through untouched
"""

# ============================================================================
# CORE EXPORTS
# ============================================================================

from kendpoint_lib.any.exceptions import (
    KEndpointConfigurationError,
    KEndpointError,
    KEndpointIOError,
    KEndpointNotFoundError,
    KEndpointParseError,
)
from kendpoint_lib.config.resolver import from_kubeconfig
from kendpoint_lib.context import (
    ClientConfig,
    Endpoint,
    EndpointMeta,
    TLSData,
    build_client_config,
    config_from_context,
    hydrate,
    persist,
)

try:
    from kendpoint_lib._version import __version__
except ImportError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Exceptions
    "KEndpointError",
    "KEndpointNotFoundError",
    "KEndpointParseError",
    "KEndpointIOError",
    "KEndpointConfigurationError",
    # Model
    "Endpoint",
    "EndpointMeta",
    "TLSData",
    "ClientConfig",
    # Operations
    "from_kubeconfig",
    "persist",
    "hydrate",
    "build_client_config",
    "config_from_context",
    # Version
    "__version__",
]
