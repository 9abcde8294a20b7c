"""Tests for endpoint persistence and hydration across the metadata and TLS stores."""

import pytest

from kendpoint_lib.any.exceptions import KEndpointError, KEndpointNotFoundError, KEndpointParseError
from kendpoint_lib.context.client_config import build_client_config
from kendpoint_lib.context.endpoint import (
    KUBERNETES_ENDPOINT,
    Endpoint,
    EndpointMeta,
    TLSData,
    endpoint_from_context,
    hydrate,
    load_tls_data,
    new_tls_data,
    persist,
    to_store_tls_data,
)
from kendpoint_lib.store.memory import MemoryContextStore
from kendpoint_lib.store.records import ContextMetadata, EndpointTLSData


def check_client_config(endpoint, server, namespace, ca, cert, key, skip_tls_verify):
    cfg = build_client_config(endpoint)
    assert cfg.host == server
    assert cfg.namespace == namespace
    assert cfg.ca_data == ca
    assert cfg.cert_data == cert
    assert cfg.key_data == key
    assert cfg.insecure is skip_tls_verify


class TestRoundTrip:
    """Persist then hydrate must give back the same endpoint."""

    def test_no_tls(self, context_store, make_endpoint):
        """Test endpoint without TLS data round trips with all TLS fields None."""
        endpoint = make_endpoint("https://test", "test")
        persist(context_store, context_store, endpoint, "raw-notls")

        hydrated = hydrate(context_store, context_store, "raw-notls")

        assert hydrated == endpoint
        assert hydrated.tls_data is None
        check_client_config(hydrated, "https://test", "test", None, None, None, False)

    def test_skip_verify_without_certs(self, context_store, make_endpoint):
        """Test skip-tls-verify with no certs is distinct from having certs."""
        endpoint = make_endpoint("https://test", "test", skip_tls_verify=True)
        persist(context_store, context_store, endpoint, "raw-notls-skip")

        hydrated = hydrate(context_store, context_store, "raw-notls-skip")

        assert hydrated == endpoint
        assert hydrated.tls_data is None
        check_client_config(hydrated, "https://test", "test", None, None, None, True)

    def test_full_tls(self, context_store, make_endpoint):
        """Test CA/cert/key bytes rehydrate byte for byte."""
        endpoint = make_endpoint("https://test", "test", b"ca", b"cert", b"key", skip_tls_verify=True)
        persist(context_store, context_store, endpoint, "raw-tls")

        hydrated = hydrate(context_store, context_store, "raw-tls")

        assert hydrated == endpoint
        check_client_config(hydrated, "https://test", "test", b"ca", b"cert", b"key", True)

    def test_partial_tls(self, context_store, make_endpoint):
        """Test that only the blobs that were set come back."""
        endpoint = make_endpoint("https://server1", "namespace1", cert=b"cert", key=b"key")
        persist(context_store, context_store, endpoint, "partial")

        hydrated = hydrate(context_store, context_store, "partial")

        assert hydrated.tls_data == TLSData(ca=None, cert=b"cert", key=b"key")
        check_client_config(hydrated, "https://server1", "namespace1", None, b"cert", b"key", False)

    def test_binary_tls_bytes_preserved(self, context_store, make_endpoint):
        """Test that arbitrary binary blobs are stored verbatim."""
        blob = bytes(range(256))
        endpoint = make_endpoint("https://test", "", ca=blob)
        persist(context_store, context_store, endpoint, "binary")

        assert hydrate(context_store, context_store, "binary").tls_data.ca == blob

    def test_present_empty_tls(self, context_store):
        """Test that TLS data with every field unset stays distinct from no TLS data."""
        endpoint = Endpoint(meta=EndpointMeta(host="https://test"), tls_data=TLSData())
        persist(context_store, context_store, endpoint, "empty-tls")

        hydrated = hydrate(context_store, context_store, "empty-tls")

        assert hydrated == endpoint
        assert hydrated.tls_data == TLSData()
        check_client_config(hydrated, "https://test", "", None, None, None, False)

    def test_present_empty_then_absent_tls(self, context_store):
        persist(context_store, context_store, Endpoint(meta=EndpointMeta(host="https://a"), tls_data=TLSData()), "ctx")
        persist(context_store, context_store, Endpoint(meta=EndpointMeta(host="https://a")), "ctx")

        assert hydrate(context_store, context_store, "ctx").tls_data is None

    def test_overwrite_with_no_tls_clears_slot(self, context_store, make_endpoint):
        """Test that re-persisting without TLS resets the slot to empty."""
        persist(context_store, context_store, make_endpoint("https://old", "ns", b"ca", b"cert", b"key"), "ctx")
        persist(context_store, context_store, make_endpoint("https://new", "ns"), "ctx")

        hydrated = hydrate(context_store, context_store, "ctx")

        assert hydrated.host == "https://new"
        assert hydrated.tls_data is None
        assert context_store.get_endpoint_tls_material("ctx", KUBERNETES_ENDPOINT) is None

    def test_separate_meta_and_tls_stores(self, memory_store, file_store, make_endpoint):
        """Test that metadata and TLS material may live in different stores."""
        endpoint = make_endpoint("https://test", "test", b"ca", b"cert", b"key")
        persist(memory_store, file_store, endpoint, "split")

        assert memory_store.get_endpoint_tls_material("split", KUBERNETES_ENDPOINT) is None
        with pytest.raises(KEndpointNotFoundError):
            file_store.get_metadata("split")
        assert hydrate(memory_store, file_store, "split") == endpoint


class TestHydrate:
    """Tests for hydrate() edge cases."""

    def test_missing_context(self, context_store):
        """Test that an unknown name raises NotFound."""
        with pytest.raises(KEndpointNotFoundError):
            hydrate(context_store, context_store, "missing")

    def test_context_without_kubernetes_endpoint(self, context_store):
        """Test that a record without a kubernetes endpoint raises NotFound."""
        context_store.create_or_update(ContextMetadata(name="docker-only", endpoints={"docker": {"host": "unix://"}}))

        with pytest.raises(KEndpointNotFoundError) as exc_info:
            hydrate(context_store, context_store, "docker-only")

        assert "docker" in str(exc_info.value)

    def test_malformed_raw_endpoint(self):
        """Test that an untyped store holding a bad kubernetes endpoint raises a parse error."""
        store = MemoryContextStore()
        store.create_or_update(ContextMetadata(name="bad", endpoints={KUBERNETES_ENDPOINT: {"skip_tls_verify": "nope"}}))

        with pytest.raises(KEndpointParseError) as exc_info:
            hydrate(store, store, "bad")

        assert isinstance(exc_info.value, KEndpointError)
        assert "bad" in str(exc_info.value)

    def test_metadata_without_tls_write(self, context_store):
        """Test that metadata with a never-written TLS slot hydrates with no TLS data."""
        meta = EndpointMeta(host="https://test", default_namespace="ns")
        context_store.create_or_update(ContextMetadata(name="meta-only", endpoints={KUBERNETES_ENDPOINT: meta}))

        hydrated = hydrate(context_store, context_store, "meta-only")

        assert hydrated.meta == meta
        assert hydrated.tls_data is None

    def test_with_tls_data_method(self, memory_store, make_endpoint):
        """Test EndpointMeta.with_tls_data() attaches stored material."""
        persist(memory_store, memory_store, make_endpoint("https://test", "", b"ca"), "ctx")
        meta = endpoint_from_context(memory_store.get_metadata("ctx"))

        endpoint = meta.with_tls_data(memory_store, "ctx")

        assert endpoint.tls_data == TLSData(ca=b"ca")


class TestEndpointFromContext:
    """Tests for endpoint_from_context()."""

    def test_typed_endpoint(self):
        meta = EndpointMeta(host="https://test")
        assert endpoint_from_context(ContextMetadata(name="a", endpoints={KUBERNETES_ENDPOINT: meta})) is meta

    def test_raw_endpoint(self):
        """Test that raw dicts from an untyped store are validated."""
        record = ContextMetadata(name="a", endpoints={KUBERNETES_ENDPOINT: {"host": "https://test"}})
        assert endpoint_from_context(record) == EndpointMeta(host="https://test")

    def test_missing_endpoint(self):
        assert endpoint_from_context(ContextMetadata(name="a")) is None

    def test_invalid_raw_endpoint(self):
        record = ContextMetadata(name="a", endpoints={KUBERNETES_ENDPOINT: {"host": ["not", "a", "string"]}})

        with pytest.raises(KEndpointParseError):
            endpoint_from_context(record)


class TestTLSConversion:
    """Tests for TLS data conversion helpers."""

    def test_new_tls_data_all_none_is_absent(self):
        assert new_tls_data() is None

    def test_to_store_tls_data_none(self):
        assert to_store_tls_data(None) is None

    def test_to_store_tls_data_skips_unset_fields(self):
        stored = to_store_tls_data(TLSData(ca=b"ca", key=b"key"))
        assert stored.files == {"ca.pem": b"ca", "key.pem": b"key"}

    def test_to_store_tls_data_present_empty(self):
        assert to_store_tls_data(TLSData()) == EndpointTLSData(files={})

    def test_load_tls_data_present_empty_slot(self, context_store):
        context_store.reset_endpoint_tls_material("ctx", KUBERNETES_ENDPOINT, EndpointTLSData())
        assert load_tls_data(context_store, "ctx") == TLSData()

    def test_load_tls_data_absent_slot(self, context_store):
        context_store.reset_endpoint_tls_material("ctx", KUBERNETES_ENDPOINT, None)
        assert load_tls_data(context_store, "ctx") is None

    def test_store_error_propagates(self, make_endpoint):
        """Test that store failures reach the caller unchanged."""

        class FailingStore:
            def create_or_update(self, metadata):
                raise OSError("disk full")

        with pytest.raises(OSError, match="disk full"):
            persist(FailingStore(), FailingStore(), make_endpoint("https://test", ""), "ctx")
