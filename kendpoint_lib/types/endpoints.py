"""KEndpoint endpoint type definitions."""

from enum import Enum


class KEndpointType(str, Enum):
    """
    Endpoint type tags.

    The tag keys an endpoint's metadata inside a context record and addresses its
    TLS material slot in the TLS store.
    """

    KUBERNETES = "kubernetes"


class KTLSFile(str, Enum):
    """File names of the TLS blobs kept per endpoint in the TLS store (the only names a slot accepts)."""

    CA = "ca.pem"
    CERT = "cert.pem"
    KEY = "key.pem"
