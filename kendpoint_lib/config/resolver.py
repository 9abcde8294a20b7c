"""
Kubeconfig resolution.

Turns a kubeconfig file plus a context selector into a normalized Endpoint:

    kubeconfig + (context name, namespace override)
        → context → cluster + user
        → EndpointMeta (host, skip-tls-verify, namespace, provider blocks)
        → TLSData (CA from cluster, cert/key from user) or None

Provider blocks (auth-provider, exec, basic auth) are captured as-is and never
evaluated or executed.
"""

import logging
from pathlib import Path

from kendpoint_lib.any.exceptions import KEndpointNotFoundError
from kendpoint_lib.config.loaders import load_kubeconfig, read_file_or_data, resolve_kubeconfig_path
from kendpoint_lib.config.schemas import KubeConfig, KubeUser, UsernamePassword
from kendpoint_lib.context.endpoint import Endpoint, EndpointMeta, new_tls_data

LOGGER = logging.getLogger(__name__)


def from_kubeconfig(path: Path | str | None = "", context_name: str = "", namespace_override: str = "") -> Endpoint:
    """
    Resolve a kubeconfig context into an Endpoint.

    Args:
    ----
        path: Kubeconfig path. Empty uses KUBECONFIG, then ~/.kube/config
        context_name: Context to resolve. Empty uses the file's current-context
        namespace_override: Namespace that wins over the context's own namespace

    Returns:
    -------
        Endpoint with metadata and TLS material (None when the file supplies no TLS bytes)

    Raises:
    ------
        KEndpointNotFoundError: If the context, its cluster or its user is missing
        KEndpointParseError: If the file is not a valid kubeconfig
        KEndpointIOError: If the file or a referenced TLS file cannot be read

    Example:
    -------
        ```python
        endpoint = from_kubeconfig("~/.kube/config", "prod", namespace_override="apps")
        print(endpoint.host, endpoint.default_namespace)
        ```

    """
    config_file = resolve_kubeconfig_path(path)
    kubeconfig = load_kubeconfig(config_file)
    return resolve_endpoint(kubeconfig, context_name, namespace_override, base_dir=config_file.parent)


def resolve_endpoint(
    kubeconfig: KubeConfig,
    context_name: str = "",
    namespace_override: str = "",
    base_dir: Path | None = None,
) -> Endpoint:
    """
    Resolve a context of an already parsed kubeconfig.

    ``base_dir`` anchors relative certificate file paths (defaults to the working directory).
    """
    base_dir = base_dir or Path.cwd()

    selected = context_name or kubeconfig.current_context
    if not selected:
        raise KEndpointNotFoundError(
            "No context selected and kubeconfig has no current-context. "
            f"Available contexts: {kubeconfig.context_names()}"
        )

    context = kubeconfig.get_context(selected)
    if not context.cluster:
        raise KEndpointNotFoundError(f"Context '{selected}' does not reference a cluster")
    cluster = kubeconfig.get_cluster(context.cluster)
    user = kubeconfig.get_user(context.user) if context.user else KubeUser()

    namespace = namespace_override or context.namespace
    if namespace_override and context.namespace and namespace_override != context.namespace:
        LOGGER.debug(f"Namespace override '{namespace_override}' replaces context namespace '{context.namespace}'")

    tls_data = new_tls_data(
        ca=read_file_or_data(cluster.certificate_authority_data, cluster.certificate_authority, base_dir),
        cert=read_file_or_data(user.client_certificate_data, user.client_certificate, base_dir),
        key=read_file_or_data(user.client_key_data, user.client_key, base_dir),
    )

    username_password = None
    if user.username or user.password:
        username_password = UsernamePassword(username=user.username or "", password=user.password or "")

    meta = EndpointMeta(
        host=cluster.server,
        skip_tls_verify=cluster.insecure_skip_tls_verify,
        default_namespace=namespace,
        auth_provider=user.auth_provider,
        exec=user.exec,
        username_password=username_password,
    )

    LOGGER.debug(
        f"Resolved context '{selected}': host={meta.host}, namespace='{namespace}', "
        f"tls={tls_data is not None}, auth_provider={_provider_name(meta)}"
    )
    return Endpoint(meta=meta, tls_data=tls_data)


def _provider_name(meta: EndpointMeta) -> str:
    if meta.auth_provider is not None:
        return meta.auth_provider.name
    if meta.exec is not None:
        return f"exec:{meta.exec.command}"
    if meta.username_password is not None:
        return "basic"
    return "none"
