"""
Any - Backend-agnostic components for KEndpoint.

This module contains the exceptions and store protocols shared by every other
part of kendpoint-lib. The IoC container lives in kendpoint_lib.any.container and
is imported on demand because it wires concrete stores.
"""

from kendpoint_lib.any.exceptions import (
    KEndpointConfigurationError,
    KEndpointError,
    KEndpointIOError,
    KEndpointNotFoundError,
    KEndpointParseError,
)
from kendpoint_lib.any.protocols import ContextStore, MetadataStore, TLSMaterialStore

__all__ = [
    # Exceptions
    "KEndpointError",
    "KEndpointNotFoundError",
    "KEndpointParseError",
    "KEndpointIOError",
    "KEndpointConfigurationError",
    # Protocols
    "MetadataStore",
    "TLSMaterialStore",
    "ContextStore",
]
