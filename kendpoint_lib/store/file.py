"""
File-backed context store.

Layout under the store root:

    meta/<sha256(name)>/meta.json               non-secret context record
    tls/<sha256(name)>/<endpoint_type>/ca.pem   secret TLS files (mode 0600)
    tls/<sha256(name)>/<endpoint_type>/cert.pem
    tls/<sha256(name)>/<endpoint_type>/key.pem

Context names are hashed so that any name is a valid directory name. A TLS
slot directory with no files is a slot reset to present-but-empty; a missing
directory is an absent slot.
"""

import hashlib
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from kendpoint_lib.any.exceptions import KEndpointIOError, KEndpointNotFoundError, KEndpointParseError
from kendpoint_lib.store.records import ContextMetadata, EndpointTLSData, StoreConfig, check_tls_file_names
from kendpoint_lib.types import KTLSFile

LOGGER = logging.getLogger(__name__)

META_FILE = "meta.json"


def context_dir_name(name: str) -> str:
    """Directory name used for a context in both halves of the store."""
    return hashlib.sha256(name.encode("utf-8")).hexdigest()


class FileContextStore:
    """
    Context store persisted to a directory tree.

    Each write to a single metadata record or TLS file is atomic (write to a
    temporary file, then rename). Metadata and TLS writes are independent.

    Example:
    -------
        ```python
        store = FileContextStore(Path("~/.kendpoint/contexts").expanduser(), get_store_config())
        persist(store, store, endpoint, "prod")
        print(store.list_names())  # ['prod']
        ```

    """

    def __init__(self, root: Path | str, config: StoreConfig | None = None):
        """
        Initialize file store.

        Args:
        ----
            root: Store root directory (created lazily on first write)
            config: Store config used to decode endpoint metadata

        """
        self._root = Path(root)
        self._config = config or StoreConfig()
        LOGGER.debug(f"Initialized file context store at: {self._root}")

    @property
    def root(self) -> Path:
        return self._root

    def _meta_dir(self, name: str) -> Path:
        return self._root / "meta" / context_dir_name(name)

    def _tls_dir(self, name: str, endpoint_type: str | None = None) -> Path:
        path = self._root / "tls" / context_dir_name(name)
        if endpoint_type is not None:
            path = path / endpoint_type
        return path

    @staticmethod
    def _atomic_write(path: Path, data: bytes, mode: int) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def create_or_update(self, metadata: ContextMetadata) -> None:
        meta_file = self._meta_dir(metadata.name) / META_FILE
        payload = json.dumps(self._config.encode(metadata), indent=2, sort_keys=True).encode("utf-8")
        try:
            self._atomic_write(meta_file, payload, 0o644)
        except OSError as e:
            raise KEndpointIOError(f"Failed to write metadata for context '{metadata.name}': {e}") from e
        LOGGER.debug(f"Wrote metadata for context '{metadata.name}' to {meta_file}")

    def _read_meta_file(self, meta_file: Path) -> ContextMetadata:
        try:
            raw = meta_file.read_text(encoding="utf-8")
        except OSError as e:
            raise KEndpointIOError(f"Failed to read {meta_file}: {e}") from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise KEndpointParseError(f"Corrupt context metadata in {meta_file}: {e}") from e
        return self._config.decode(data)

    def get_metadata(self, name: str) -> ContextMetadata:
        meta_file = self._meta_dir(name) / META_FILE
        if not meta_file.exists():
            raise KEndpointNotFoundError(f"Context '{name}' not found in store {self._root}")
        return self._read_meta_file(meta_file)

    def list_names(self) -> list[str]:
        meta_root = self._root / "meta"
        if not meta_root.is_dir():
            return []
        names = []
        for meta_file in meta_root.glob(f"*/{META_FILE}"):
            names.append(self._read_meta_file(meta_file).name)
        return sorted(names)

    def remove(self, name: str) -> None:
        meta_dir = self._meta_dir(name)
        if not meta_dir.exists():
            raise KEndpointNotFoundError(f"Context '{name}' not found in store {self._root}")
        try:
            shutil.rmtree(meta_dir)
            shutil.rmtree(self._tls_dir(name), ignore_errors=True)
        except OSError as e:
            raise KEndpointIOError(f"Failed to remove context '{name}': {e}") from e
        LOGGER.info(f"Removed context '{name}' from {self._root}")

    def reset_endpoint_tls_material(self, name: str, endpoint_type: str, data: EndpointTLSData | None) -> None:
        if data is not None:
            check_tls_file_names(data.files)
        tls_dir = self._tls_dir(name, endpoint_type)
        try:
            if tls_dir.exists():
                shutil.rmtree(tls_dir)
            if data is None:
                LOGGER.debug(f"Reset TLS material for context '{name}' endpoint '{endpoint_type}' to absent")
                return
            # The slot directory itself marks the material as present, even with no files
            tls_dir.mkdir(mode=0o700, parents=True)
            for file_name, blob in data.files.items():
                self._atomic_write(tls_dir / file_name, blob, 0o600)
        except OSError as e:
            raise KEndpointIOError(
                f"Failed to reset TLS material for context '{name}' endpoint '{endpoint_type}': {e}"
            ) from e
        LOGGER.debug(
            f"Reset TLS material for context '{name}' endpoint '{endpoint_type}' "
            f"(files: {sorted(data.files)})"
        )

    def get_endpoint_tls_material(self, name: str, endpoint_type: str) -> EndpointTLSData | None:
        tls_dir = self._tls_dir(name, endpoint_type)
        if not tls_dir.is_dir():
            return None
        files = {}
        try:
            for tls_file in KTLSFile:
                path = tls_dir / tls_file.value
                if path.is_file():
                    files[tls_file.value] = path.read_bytes()
        except OSError as e:
            raise KEndpointIOError(
                f"Failed to read TLS material for context '{name}' endpoint '{endpoint_type}': {e}"
            ) from e
        return EndpointTLSData(files=files)

    def __repr__(self) -> str:
        """String representation."""
        return f"FileContextStore(root='{self._root}')"
