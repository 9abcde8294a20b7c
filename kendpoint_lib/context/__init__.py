"""Kubernetes endpoint model, split storage and client configuration builder."""

from kendpoint_lib.context.client_config import ClientConfig, build_client_config, config_from_context
from kendpoint_lib.context.endpoint import (
    KUBERNETES_ENDPOINT,
    Endpoint,
    EndpointMeta,
    TLSData,
    endpoint_from_context,
    hydrate,
    load_tls_data,
    new_tls_data,
    persist,
    to_store_tls_data,
    with_tls_data,
)

__all__ = [
    "KUBERNETES_ENDPOINT",
    "Endpoint",
    "EndpointMeta",
    "TLSData",
    "ClientConfig",
    "new_tls_data",
    "to_store_tls_data",
    "load_tls_data",
    "endpoint_from_context",
    "with_tls_data",
    "persist",
    "hydrate",
    "build_client_config",
    "config_from_context",
]
