"""KEndpoint type definitions (enums)."""

from kendpoint_lib.types.endpoints import KEndpointType, KTLSFile

__all__ = [
    "KEndpointType",
    "KTLSFile",
]
