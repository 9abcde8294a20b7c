"""
Record shapes exchanged with context stores.

- ContextMetadata: the non-secret record of one context, with per-endpoint-type metadata
- EndpointTLSData: the secret TLS files of one endpoint
- StoreConfig: maps endpoint type tags to the pydantic models used to decode them
"""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kendpoint_lib.any.exceptions import KEndpointParseError
from kendpoint_lib.types import KTLSFile

LOGGER = logging.getLogger(__name__)


class ContextMetadata(BaseModel):
    """
    Non-secret record of a stored context.

    Example:
    -------
        name: prod-eks
        metadata:
          description: production cluster
        endpoints:
          kubernetes:
            host: https://ABCD.gr7.us-west-2.eks.amazonaws.com
            skip_tls_verify: false
            default_namespace: apps

    """

    name: str
    metadata: dict[str, Any] | None = None
    endpoints: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)


def check_tls_file_names(names: Iterable[str]) -> None:
    """
    Reject TLS file names that are not one of the KTLSFile values.

    Raises
    ------
        ValueError: If any name is unknown (e.g. "../x")

    """
    valid = [f.value for f in KTLSFile]
    unknown = sorted(n for n in names if n not in valid)
    if unknown:
        raise ValueError(f"Unknown TLS file names: {unknown}. Valid names: {valid}")


class EndpointTLSData(BaseModel):
    """
    TLS files of one endpoint, keyed by file name (ca.pem, cert.pem, key.pem).

    A record with no files is a slot that is present but empty. Stores return
    None, not an empty record, for a slot that was never written or was reset
    to absent.
    """

    files: dict[str, bytes] = Field(default_factory=dict)

    @field_validator("files")
    @classmethod
    def known_file_names(cls, v: dict[str, bytes]) -> dict[str, bytes]:
        check_tls_file_names(v)
        return v


class StoreConfig:
    """
    Decoding configuration for a context store.

    Stores persist endpoint metadata as plain JSON. When a record is read back,
    each endpoint registered here is validated into its model; unregistered
    endpoint types stay plain dicts.

    Example:
    -------
        ```python
        config = StoreConfig({KEndpointType.KUBERNETES.value: EndpointMeta})
        store = FileContextStore(tmp_path, config)
        ```

    """

    def __init__(self, endpoint_types: dict[str, type[BaseModel]] | None = None):
        self._endpoint_types: dict[str, type[BaseModel]] = dict(endpoint_types or {})

    @property
    def endpoint_types(self) -> list[str]:
        return sorted(self._endpoint_types)

    def encode(self, metadata: ContextMetadata) -> dict[str, Any]:
        """
        Convert a record to a JSON-compatible dict.

        Endpoint models are dumped by alias with unset provider blocks dropped so
        that opaque fields come back exactly as they went in.
        """
        endpoints = {}
        for endpoint_type, value in metadata.endpoints.items():
            if isinstance(value, BaseModel):
                endpoints[endpoint_type] = value.model_dump(mode="json", by_alias=True, exclude_none=True)
            else:
                endpoints[endpoint_type] = value
        return {"name": metadata.name, "metadata": metadata.metadata, "endpoints": endpoints}

    def decode(self, data: Any) -> ContextMetadata:
        """
        Convert a JSON-compatible dict back to a record.

        Raises
        ------
            KEndpointParseError: If the record or a registered endpoint is malformed

        """
        try:
            record = ContextMetadata.model_validate(data)
        except ValidationError as e:
            raise KEndpointParseError(f"Invalid context metadata record: {e}") from e

        endpoints = {}
        for endpoint_type, raw in record.endpoints.items():
            model = self._endpoint_types.get(endpoint_type)
            if model is None:
                LOGGER.debug(f"No model registered for endpoint type '{endpoint_type}', keeping raw data")
                endpoints[endpoint_type] = raw
                continue
            try:
                endpoints[endpoint_type] = model.model_validate(raw)
            except ValidationError as e:
                raise KEndpointParseError(
                    f"Invalid '{endpoint_type}' endpoint in context '{record.name}': {e}"
                ) from e

        return ContextMetadata(name=record.name, metadata=record.metadata, endpoints=endpoints)

    def __repr__(self) -> str:
        """String representation."""
        return f"StoreConfig(endpoint_types={self.endpoint_types})"
