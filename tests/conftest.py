"""Pytest configuration and fixtures for kendpoint-lib tests."""

import base64
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from kendpoint_lib.any.container import default_store_config
from kendpoint_lib.context.endpoint import Endpoint, EndpointMeta, new_tls_data
from kendpoint_lib.store.file import FileContextStore
from kendpoint_lib.store.memory import MemoryContextStore
from kendpoint_lib.store.records import StoreConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def b64(data: bytes) -> str:
    """Base64-encode bytes the way kubeconfig ``*-data`` fields are written."""
    return base64.b64encode(data).decode("ascii")


def _make_endpoint(
    server: str,
    default_namespace: str,
    ca: bytes | None = None,
    cert: bytes | None = None,
    key: bytes | None = None,
    skip_tls_verify: bool = False,
) -> Endpoint:
    """Build an endpoint directly from fields (TLS data absent when no bytes are given)."""
    return Endpoint(
        meta=EndpointMeta(host=server, skip_tls_verify=skip_tls_verify, default_namespace=default_namespace),
        tls_data=new_tls_data(ca=ca, cert=cert, key=key),
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the static GKE/EKS/k3s kubeconfig fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def make_endpoint() -> Callable[..., Endpoint]:
    """Factory building endpoints from plain fields."""
    return _make_endpoint


@pytest.fixture
def store_config() -> StoreConfig:
    """Store config decoding kubernetes endpoints into EndpointMeta."""
    return default_store_config()


@pytest.fixture
def memory_store(store_config) -> MemoryContextStore:
    """Fresh in-memory context store."""
    return MemoryContextStore(store_config)


@pytest.fixture
def file_store(tmp_path, store_config) -> FileContextStore:
    """Fresh file context store rooted in a temporary directory."""
    return FileContextStore(tmp_path / "store", store_config)


@pytest.fixture(params=["memory", "file"])
def context_store(request, memory_store, file_store):
    """Run a test against both store implementations."""
    return memory_store if request.param == "memory" else file_store


@pytest.fixture
def write_kubeconfig(tmp_path) -> Callable[[dict, str], Path]:
    """Write a kubeconfig dict to a YAML file and return its path."""

    def _write(config: dict, filename: str = "kubeconfig") -> Path:
        path = tmp_path / filename
        with open(path, "w") as f:
            yaml.dump(config, f)
        return path

    return _write


@pytest.fixture
def two_context_kubeconfig(write_kubeconfig) -> Path:
    """
    Kubeconfig with two contexts sharing one user.

    - context1 (current): cluster1 (https://server1, insecure), namespace1
    - context2: cluster2 (https://server2, CA "ca"), namespace2
    - user: client cert "cert", client key "key"
    """
    return write_kubeconfig(
        {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [
                {"name": "cluster1", "cluster": {"server": "https://server1", "insecure-skip-tls-verify": True}},
                {"name": "cluster2", "cluster": {"server": "https://server2", "certificate-authority-data": b64(b"ca")}},
            ],
            "users": [
                {
                    "name": "user",
                    "user": {"client-certificate-data": b64(b"cert"), "client-key-data": b64(b"key")},
                }
            ],
            "contexts": [
                {"name": "context1", "context": {"cluster": "cluster1", "user": "user", "namespace": "namespace1"}},
                {"name": "context2", "context": {"cluster": "cluster2", "user": "user", "namespace": "namespace2"}},
            ],
            "current-context": "context1",
        }
    )
