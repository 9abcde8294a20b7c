#!/usr/bin/env python3
"""
Example: Saving kubeconfig contexts as endpoints and loading them back.

This example demonstrates:
1. Resolving the current kubeconfig context into an Endpoint
2. Persisting it with metadata and TLS material kept in separate store halves
3. Rebuilding a client configuration and writing a standalone kubeconfig
"""

import sys
import tempfile
from pathlib import Path

from kendpoint_lib import KEndpointError, config_from_context, from_kubeconfig, persist
from kendpoint_lib.any.container import get_context_store

store = get_context_store()
print(f"Store: {store}")

# Example 1: Current context of the default kubeconfig (KUBECONFIG or ~/.kube/config)
print("=== Example 1: Current context ===")
try:
    endpoint = from_kubeconfig()
except KEndpointError as e:
    print(f"Cannot resolve kubeconfig: {e}")
    sys.exit(1)

print(f"Host: {endpoint.host}")
print(f"Namespace: {endpoint.default_namespace or '(none)'}")
print(f"Skip TLS verify: {endpoint.skip_tls_verify}")
print(f"Has TLS material: {endpoint.has_tls}")

# Example 2: Persist under a name
print("\n=== Example 2: Persist ===")
persist(store, store, endpoint, "example")
print(f"Stored contexts: {store.list_names()}")

# Example 3: Rebuild the client configuration
print("\n=== Example 3: Client config ===")
cfg = config_from_context(store, store, "example")
print(f"Host: {cfg.host}")
print(f"Auth provider: {cfg.auth_provider.name if cfg.auth_provider else None}")
print(f"Exec command: {cfg.exec_provider.command if cfg.exec_provider else None}")

# Example 4: Standalone kubeconfig for kubectl
print("\n=== Example 4: Standalone kubeconfig ===")
with tempfile.TemporaryDirectory() as tmp:
    path = cfg.write_kubeconfig(Path(tmp) / "kubeconfig")
    print(f"Wrote {path} ({path.stat().st_size} bytes)")

store.remove("example")
print("\nAll examples completed!")
