"""
Kubeconfig loading functions.

Reads a kubeconfig file from disk, parses it with PyYAML and validates it into
the KubeConfig model. Every failure is mapped onto the KEndpoint exception
taxonomy:

- KEndpointIOError: the file cannot be read
- KEndpointParseError: the file is not valid YAML or not a valid kubeconfig
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from kendpoint_lib.any.exceptions import KEndpointIOError, KEndpointParseError
from kendpoint_lib.config.schemas import KubeConfig
from kendpoint_lib.config.settings import default_kubeconfig_path

LOGGER = logging.getLogger(__name__)


def parse_kubeconfig(text: str, source: str = "<string>") -> KubeConfig:
    """
    Parse kubeconfig text.

    Args:
    ----
        text: Kubeconfig YAML
        source: Name used in error messages (usually the file path)

    Returns:
    -------
        Validated KubeConfig

    Raises:
    ------
        KEndpointParseError: If the text is not a valid kubeconfig

    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise KEndpointParseError(f"Failed to parse kubeconfig {source}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise KEndpointParseError(
            f"Invalid kubeconfig {source}: expected a mapping at the top level, got {type(data).__name__}"
        )

    try:
        return KubeConfig.model_validate(data)
    except ValidationError as e:
        raise KEndpointParseError(f"Invalid kubeconfig {source}: {e}") from e


def load_kubeconfig(path: Path | str | None = None) -> KubeConfig:
    """
    Load and validate a kubeconfig file.

    Args:
    ----
        path: Kubeconfig path. Empty or None uses KUBECONFIG, then ~/.kube/config

    Returns:
    -------
        Validated KubeConfig

    Raises:
    ------
        KEndpointIOError: If the file cannot be read
        KEndpointParseError: If the file is not a valid kubeconfig

    """
    config_file = resolve_kubeconfig_path(path)

    try:
        text = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise KEndpointIOError(f"Failed to read kubeconfig {config_file}: {e}") from e

    kubeconfig = parse_kubeconfig(text, source=str(config_file))
    LOGGER.debug(
        f"Loaded kubeconfig {config_file}: contexts={kubeconfig.context_names()}, "
        f"current-context='{kubeconfig.current_context}'"
    )
    return kubeconfig


def resolve_kubeconfig_path(path: Path | str | None) -> Path:
    """Return the explicit path (user-expanded), or the default kubeconfig path when empty."""
    if path is None or str(path) == "":
        return default_kubeconfig_path()
    return Path(path).expanduser()


def read_file_or_data(data: bytes | None, file_path: str | None, base_dir: Path) -> bytes | None:
    """
    Get TLS bytes from inline data or a referenced file.

    Inline data wins when both are present. Relative file paths are resolved
    against ``base_dir`` (the kubeconfig's directory).

    Raises
    ------
        KEndpointIOError: If the referenced file cannot be read

    """
    if data:
        return data
    if not file_path:
        return None

    path = Path(file_path).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    try:
        return path.read_bytes()
    except OSError as e:
        raise KEndpointIOError(f"Failed to read TLS file {path}: {e}") from e
