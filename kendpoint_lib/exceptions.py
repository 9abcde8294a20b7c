"""
Exception definitions for KEndpoint (short aliases).

This module re-exports exceptions from kendpoint_lib.any.exceptions under the
names used by the error taxonomy: NotFoundError, ParseError, EndpointIOError.
"""

from kendpoint_lib.any.exceptions import (
    KEndpointConfigurationError as ConfigurationError,
)
from kendpoint_lib.any.exceptions import (
    KEndpointError,
)
from kendpoint_lib.any.exceptions import (
    KEndpointIOError as EndpointIOError,
)
from kendpoint_lib.any.exceptions import (
    KEndpointNotFoundError as NotFoundError,
)
from kendpoint_lib.any.exceptions import (
    KEndpointParseError as ParseError,
)

__all__ = [
    "KEndpointError",
    "NotFoundError",
    "ParseError",
    "EndpointIOError",
    "ConfigurationError",
]
