"""
KEndpoint exception classes.

This module defines custom exceptions for KEndpoint so that resolution and
storage failures never masquerade as built-in Python errors.

All KEndpoint exceptions follow the naming convention KEndpoint*Error.
"""


class KEndpointError(Exception):
    """
    Base exception for all KEndpoint errors.

    Catch this to handle every KEndpoint failure with a single except clause
    without catching unrelated Python errors.
    """

    pass


class KEndpointNotFoundError(KEndpointError):
    """
    Raised when a referenced entry does not exist.

    Covers contexts, clusters and users missing from a kubeconfig file, as well as
    endpoint names missing from a context store.

    Example:
    -------
        >>> from_kubeconfig("~/.kube/config", context_name="staging")
        KEndpointNotFoundError: Context 'staging' not found in ~/.kube/config...

    """

    pass


class KEndpointParseError(KEndpointError):
    """
    Raised when a kubeconfig file or a stored record cannot be parsed.

    This includes invalid YAML, documents that are not mappings, schema violations
    and malformed base64 certificate data.
    """

    pass


class KEndpointIOError(KEndpointError):
    """
    Raised when a file or store cannot be read or written.

    Wraps the underlying OSError, which stays available as ``__cause__``.
    """

    pass


class KEndpointConfigurationError(KEndpointError):
    """Raised when library configuration (environment variables, store setup) is invalid."""

    pass
