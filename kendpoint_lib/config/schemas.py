"""
Kubeconfig schemas.

This module defines Pydantic models for the kubeconfig file format:
- Clusters (server, TLS verification, CA data or file)
- Users (client cert/key data or files, basic auth, auth-provider and exec plugins)
- Contexts (cluster + user + namespace bindings) and the current-context pointer

Field aliases follow the on-disk kubeconfig keys. Unknown keys are kept so that
provider blocks survive a round trip unchanged.
"""

import base64
import binascii
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kendpoint_lib.any.exceptions import KEndpointNotFoundError


def _decode_base64_data(value: Any) -> bytes | None:
    """Decode a kubeconfig ``*-data`` field (base64 text) into raw bytes."""
    if value is None or value == "":
        return None
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected base64 string, got {type(value).__name__}")
    try:
        return base64.b64decode("".join(value.split()), validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 data: {e}") from e


class AuthProviderConfig(BaseModel):
    """
    Named auth-provider plugin configuration (e.g. gcp, oidc, azure).

    Carried opaquely: kendpoint-lib never interprets ``config``.
    """

    name: str
    config: dict[str, str] | None = None

    model_config = ConfigDict(extra="allow")

    def to_kubeconfig(self) -> dict[str, Any]:
        """Render the block exactly as it appears under ``user.auth-provider``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ExecConfig(BaseModel):
    """
    Exec credential plugin configuration (e.g. ``aws eks get-token``).

    Carried opaquely: the command is never run by kendpoint-lib.

    Example:
    -------
        exec:
          apiVersion: client.authentication.k8s.io/v1beta1
          command: aws
          args: ["eks", "get-token", "--cluster-name", "prod"]
          env:
            - name: AWS_PROFILE
              value: prod

    """

    command: str
    args: list[str] | None = None
    env: list[dict[str, str]] | None = None
    api_version: Annotated[str | None, Field(default=None, alias="apiVersion")]
    install_hint: Annotated[str | None, Field(default=None, alias="installHint")]
    provide_cluster_info: Annotated[bool | None, Field(default=None, alias="provideClusterInfo")]
    interactive_mode: Annotated[str | bool | None, Field(default=None, alias="interactiveMode")]

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_kubeconfig(self) -> dict[str, Any]:
        """Render the block exactly as it appears under ``user.exec``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UsernamePassword(BaseModel):
    """Basic-auth credential pair."""

    username: str = ""
    password: str = ""


class KubeCluster(BaseModel):
    """Cluster entry (``clusters[].cluster``)."""

    server: str = ""
    insecure_skip_tls_verify: Annotated[bool, Field(default=False, alias="insecure-skip-tls-verify")]
    certificate_authority: Annotated[str | None, Field(default=None, alias="certificate-authority")]
    certificate_authority_data: Annotated[bytes | None, Field(default=None, alias="certificate-authority-data")]

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("certificate_authority_data", mode="before")
    @classmethod
    def decode_data(cls, v: Any) -> bytes | None:
        return _decode_base64_data(v)


class KubeUser(BaseModel):
    """User entry (``users[].user``), kubectl's AuthInfo."""

    client_certificate: Annotated[str | None, Field(default=None, alias="client-certificate")]
    client_certificate_data: Annotated[bytes | None, Field(default=None, alias="client-certificate-data")]
    client_key: Annotated[str | None, Field(default=None, alias="client-key")]
    client_key_data: Annotated[bytes | None, Field(default=None, alias="client-key-data")]
    token: str | None = None
    token_file: Annotated[str | None, Field(default=None, alias="tokenFile")]
    username: str | None = None
    password: str | None = None
    auth_provider: Annotated[AuthProviderConfig | None, Field(default=None, alias="auth-provider")]
    exec: ExecConfig | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("client_certificate_data", "client_key_data", mode="before")
    @classmethod
    def decode_data(cls, v: Any) -> bytes | None:
        return _decode_base64_data(v)


class KubeContext(BaseModel):
    """Context entry (``contexts[].context``)."""

    cluster: str = ""
    user: str = ""
    namespace: str = ""

    model_config = ConfigDict(extra="allow")


class NamedCluster(BaseModel):
    name: str
    cluster: KubeCluster = Field(default_factory=KubeCluster)


class NamedUser(BaseModel):
    name: str
    user: KubeUser = Field(default_factory=KubeUser)

    @field_validator("user", mode="before")
    @classmethod
    def empty_user(cls, v: Any) -> Any:
        return {} if v is None else v


class NamedContext(BaseModel):
    name: str
    context: KubeContext = Field(default_factory=KubeContext)


class KubeConfig(BaseModel):
    """
    A whole kubeconfig document.

    Example:
    -------
        apiVersion: v1
        kind: Config
        current-context: dev
        clusters:
          - name: dev
            cluster:
              server: https://dev.example.com:6443
              certificate-authority-data: LS0tLS1CRUdJTi...
        users:
          - name: dev-admin
            user:
              client-certificate-data: LS0tLS1CRUdJTi...
              client-key-data: LS0tLS1CRUdJTi...
        contexts:
          - name: dev
            context:
              cluster: dev
              user: dev-admin
              namespace: apps

    """

    api_version: Annotated[str, Field(default="v1", alias="apiVersion")]
    kind: str = "Config"
    clusters: list[NamedCluster] = Field(default_factory=list)
    users: list[NamedUser] = Field(default_factory=list)
    contexts: list[NamedContext] = Field(default_factory=list)
    current_context: Annotated[str, Field(default="", alias="current-context")]

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("clusters", "users", "contexts", mode="before")
    @classmethod
    def null_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("current_context", mode="before")
    @classmethod
    def null_current_context(cls, v: Any) -> Any:
        return "" if v is None else v

    def context_names(self) -> list[str]:
        """Names of all contexts, in file order."""
        return [c.name for c in self.contexts]

    def get_context(self, name: str) -> KubeContext:
        """
        Look up a context by name.

        Raises
        ------
            KEndpointNotFoundError: If no context has that name

        """
        for entry in self.contexts:
            if entry.name == name:
                return entry.context
        raise KEndpointNotFoundError(
            f"Context '{name}' not found in kubeconfig. " f"Available contexts: {self.context_names()}"
        )

    def get_cluster(self, name: str) -> KubeCluster:
        """Look up a cluster by name, raising KEndpointNotFoundError when missing."""
        for entry in self.clusters:
            if entry.name == name:
                return entry.cluster
        raise KEndpointNotFoundError(
            f"Cluster '{name}' not found in kubeconfig. " f"Available clusters: {[c.name for c in self.clusters]}"
        )

    def get_user(self, name: str) -> KubeUser:
        """Look up a user by name, raising KEndpointNotFoundError when missing."""
        for entry in self.users:
            if entry.name == name:
                return entry.user
        raise KEndpointNotFoundError(
            f"User '{name}' not found in kubeconfig. " f"Available users: {[u.name for u in self.users]}"
        )
