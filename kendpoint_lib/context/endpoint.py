"""
Kubernetes endpoint model and split storage.

An Endpoint is the normalized connection descriptor for one cluster context:

- EndpointMeta: non-secret metadata (host, TLS verification, namespace, opaque
  auth-provider / exec / basic-auth blocks), written to the metadata store
- TLSData: secret CA / client cert / client key bytes, written to the TLS store

Both halves are keyed by the same context name. The two writes are independent.
TLS is tri-state: a never-written or absent slot reads back as ``tls_data=None``,
a slot written with no files reads back as ``TLSData()``, and anything else
reads back with exactly the fields that were set.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kendpoint_lib.any.exceptions import KEndpointNotFoundError, KEndpointParseError
from kendpoint_lib.any.protocols import MetadataStore, TLSMaterialStore
from kendpoint_lib.config.schemas import AuthProviderConfig, ExecConfig, UsernamePassword
from kendpoint_lib.store.records import ContextMetadata, EndpointTLSData
from kendpoint_lib.types import KEndpointType, KTLSFile

LOGGER = logging.getLogger(__name__)

KUBERNETES_ENDPOINT = KEndpointType.KUBERNETES.value


class EndpointMeta(BaseModel):
    """
    Non-secret endpoint metadata.

    ``auth_provider``, ``exec`` and ``username_password`` are carried as-is from
    the source kubeconfig for a downstream client to evaluate.
    """

    host: str = ""
    skip_tls_verify: bool = False
    default_namespace: str = ""
    auth_provider: AuthProviderConfig | None = None
    exec: ExecConfig | None = None
    username_password: UsernamePassword | None = None

    model_config = ConfigDict(populate_by_name=True)

    def with_tls_data(self, tls_store: TLSMaterialStore, name: str) -> "Endpoint":
        """Attach the TLS material stored under ``name``; see :func:`with_tls_data`."""
        return with_tls_data(self, tls_store, name)


class TLSData(BaseModel):
    """Secret TLS material. Each field is independently optional."""

    ca: bytes | None = None
    cert: bytes | None = None
    key: bytes | None = None


class Endpoint(BaseModel):
    """A normalized endpoint: metadata plus optional TLS material."""

    meta: EndpointMeta = Field(default_factory=EndpointMeta)
    tls_data: TLSData | None = None

    @property
    def host(self) -> str:
        return self.meta.host

    @property
    def skip_tls_verify(self) -> bool:
        return self.meta.skip_tls_verify

    @property
    def default_namespace(self) -> str:
        return self.meta.default_namespace

    @property
    def has_tls(self) -> bool:
        return self.tls_data is not None


def new_tls_data(ca: bytes | None = None, cert: bytes | None = None, key: bytes | None = None) -> TLSData | None:
    """
    Build TLS data, or None when no bytes are given at all.

    Absent TLS and TLS with all fields unset are different states. The resolver
    uses this helper so that a kubeconfig without TLS bytes yields the former.
    """
    if ca is None and cert is None and key is None:
        return None
    return TLSData(ca=ca, cert=cert, key=key)


def to_store_tls_data(tls_data: TLSData | None) -> EndpointTLSData | None:
    """Convert TLS data to the TLS store's file-per-blob shape (None stays None)."""
    if tls_data is None:
        return None
    files = {}
    if tls_data.ca is not None:
        files[KTLSFile.CA.value] = tls_data.ca
    if tls_data.cert is not None:
        files[KTLSFile.CERT.value] = tls_data.cert
    if tls_data.key is not None:
        files[KTLSFile.KEY.value] = tls_data.key
    return EndpointTLSData(files=files)


def load_tls_data(tls_store: TLSMaterialStore, name: str, endpoint_type: str = KUBERNETES_ENDPOINT) -> TLSData | None:
    """
    Read an endpoint's TLS material back into TLSData.

    Returns
    -------
        TLSData (with every field None for a present but empty slot), or None
        when the slot was never written or was reset to absent

    """
    stored = tls_store.get_endpoint_tls_material(name, endpoint_type)
    if stored is None:
        return None
    return TLSData(
        ca=stored.files.get(KTLSFile.CA.value),
        cert=stored.files.get(KTLSFile.CERT.value),
        key=stored.files.get(KTLSFile.KEY.value),
    )


def endpoint_from_context(metadata: ContextMetadata) -> EndpointMeta | None:
    """
    Extract the kubernetes endpoint metadata from a context record.

    Returns
    -------
        EndpointMeta, or None when the record has no kubernetes endpoint

    Raises
    ------
        KEndpointParseError: If a raw kubernetes endpoint mapping is malformed

    """
    raw = metadata.endpoints.get(KUBERNETES_ENDPOINT)
    if raw is None:
        return None
    if isinstance(raw, EndpointMeta):
        return raw
    if isinstance(raw, dict):
        # Store configured without a model for this endpoint type
        try:
            return EndpointMeta.model_validate(raw)
        except ValidationError as e:
            raise KEndpointParseError(
                f"Invalid {KUBERNETES_ENDPOINT} endpoint in context '{metadata.name}': {e}"
            ) from e
    LOGGER.warning(f"Unexpected kubernetes endpoint type in context '{metadata.name}': {type(raw).__name__}")
    return None


def with_tls_data(meta: EndpointMeta, tls_store: TLSMaterialStore, name: str) -> Endpoint:
    """Combine metadata with the TLS material stored under ``name``."""
    return Endpoint(meta=meta, tls_data=load_tls_data(tls_store, name))


def persist(meta_store: MetadataStore, tls_store: TLSMaterialStore, endpoint: Endpoint, name: str) -> None:
    """
    Write an endpoint to both stores.

    Metadata is upserted first, then the TLS slot is reset to the endpoint's
    material (or to absent when it has none). Store errors propagate unchanged.

    Args:
    ----
        meta_store: Store receiving the non-secret metadata
        tls_store: Store receiving the TLS material
        endpoint: Endpoint to persist
        name: Context name, the join key between both stores

    Example:
    -------
        ```python
        endpoint = from_kubeconfig("~/.kube/config", "prod", "")
        persist(store, store, endpoint, "prod")
        ```

    """
    meta_store.create_or_update(ContextMetadata(name=name, endpoints={KUBERNETES_ENDPOINT: endpoint.meta}))
    tls_store.reset_endpoint_tls_material(name, KUBERNETES_ENDPOINT, to_store_tls_data(endpoint.tls_data))
    LOGGER.info(f"Persisted endpoint '{name}' (host={endpoint.host}, tls={endpoint.has_tls})")


def hydrate(meta_store: MetadataStore, tls_store: TLSMaterialStore, name: str) -> Endpoint:
    """
    Read an endpoint back from both stores.

    Metadata is read first, then TLS material is fetched by the same name.

    Raises
    ------
        KEndpointNotFoundError: If the context is missing or has no kubernetes endpoint

    """
    metadata = meta_store.get_metadata(name)
    meta = endpoint_from_context(metadata)
    if meta is None:
        raise KEndpointNotFoundError(
            f"Context '{name}' has no {KUBERNETES_ENDPOINT} endpoint. "
            f"Available endpoints: {sorted(metadata.endpoints)}"
        )
    endpoint = with_tls_data(meta, tls_store, name)
    LOGGER.debug(f"Hydrated endpoint '{name}' (host={endpoint.host}, tls={endpoint.has_tls})")
    return endpoint
