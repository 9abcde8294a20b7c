"""
Client configuration builder.

Rebuilds a usable Kubernetes client configuration from a hydrated Endpoint,
whatever authentication mechanism produced it. Provider extensions (auth-provider,
exec) are passed through untouched for the networking layer to evaluate.
"""

import base64
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from kendpoint_lib.any.exceptions import KEndpointIOError
from kendpoint_lib.any.protocols import MetadataStore, TLSMaterialStore
from kendpoint_lib.config.schemas import AuthProviderConfig, ExecConfig
from kendpoint_lib.context.endpoint import KUBERNETES_ENDPOINT, Endpoint, hydrate

LOGGER = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """
    Connection settings for a Kubernetes client.

    Example:
    -------
        ```python
        cfg = build_client_config(endpoint)
        print(cfg.host, cfg.namespace, cfg.insecure)
        cfg.write_kubeconfig(tmp_path / "kubeconfig")  # for kubectl or kubernetes.config
        ```

    """

    host: str = ""
    namespace: str = ""
    insecure: bool = False
    ca_data: bytes | None = None
    cert_data: bytes | None = None
    key_data: bytes | None = None
    username: str = ""
    password: str = ""
    auth_provider: AuthProviderConfig | None = None
    exec_provider: ExecConfig | None = None

    def to_kubeconfig(self) -> dict[str, Any]:
        """
        Render a single-context kubeconfig document.

        Cluster, user and context are all named "kubernetes" and the context is
        current. TLS bytes are embedded as base64 ``*-data`` fields; provider
        blocks are written verbatim.
        """
        cluster: dict[str, Any] = {"server": self.host}
        if self.insecure:
            cluster["insecure-skip-tls-verify"] = True
        if self.ca_data is not None:
            cluster["certificate-authority-data"] = _b64(self.ca_data)

        user: dict[str, Any] = {}
        if self.cert_data is not None:
            user["client-certificate-data"] = _b64(self.cert_data)
        if self.key_data is not None:
            user["client-key-data"] = _b64(self.key_data)
        if self.username:
            user["username"] = self.username
        if self.password:
            user["password"] = self.password
        if self.auth_provider is not None:
            user["auth-provider"] = self.auth_provider.to_kubeconfig()
        if self.exec_provider is not None:
            user["exec"] = self.exec_provider.to_kubeconfig()

        context: dict[str, Any] = {"cluster": KUBERNETES_ENDPOINT, "user": KUBERNETES_ENDPOINT}
        if self.namespace:
            context["namespace"] = self.namespace

        return {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [{"name": KUBERNETES_ENDPOINT, "cluster": cluster}],
            "users": [{"name": KUBERNETES_ENDPOINT, "user": user}],
            "contexts": [{"name": KUBERNETES_ENDPOINT, "context": context}],
            "current-context": KUBERNETES_ENDPOINT,
        }

    def write_kubeconfig(self, path: Path | str) -> Path:
        """
        Write :meth:`to_kubeconfig` as YAML with owner-only permissions.

        Raises
        ------
            KEndpointIOError: If the file cannot be written

        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(mode=0o600, exist_ok=True)
            path.chmod(0o600)
            with open(path, "w") as f:
                yaml.safe_dump(self.to_kubeconfig(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise KEndpointIOError(f"Failed to write kubeconfig {path}: {e}") from e
        LOGGER.debug(f"Wrote kubeconfig for {self.host} to {path}")
        return path


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def build_client_config(endpoint: Endpoint) -> ClientConfig:
    """
    Build a client configuration from an endpoint.

    Pure and total: TLS fields are None when the endpoint has no TLS data or the
    specific blob is unset, and provider blocks are carried unmodified.
    """
    meta = endpoint.meta
    tls = endpoint.tls_data
    credentials = meta.username_password

    return ClientConfig(
        host=meta.host,
        namespace=meta.default_namespace,
        insecure=meta.skip_tls_verify,
        ca_data=tls.ca if tls is not None else None,
        cert_data=tls.cert if tls is not None else None,
        key_data=tls.key if tls is not None else None,
        username=credentials.username if credentials is not None else "",
        password=credentials.password if credentials is not None else "",
        auth_provider=meta.auth_provider,
        exec_provider=meta.exec,
    )


def config_from_context(meta_store: MetadataStore, tls_store: TLSMaterialStore, name: str) -> ClientConfig:
    """Hydrate the endpoint stored under ``name`` and build its client configuration."""
    return build_client_config(hydrate(meta_store, tls_store, name))
