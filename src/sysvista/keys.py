"""Keying and hashing layer for sysvista ids.

Provides the key string constructors and the one-way hash used for:
- component keys: {kind}:{name}:{file}
- workflow keys: workflow:{entry_transport_id}
"""

import hashlib

ID_LENGTH = 16


def component_key(kind: str, name: str, file: str) -> str:
    """Construct a component key string.

    Format: {kind}:{name}:{file}
    """
    return f"{kind}:{name}:{file}"


def workflow_key(transport_id: str) -> str:
    """Construct a workflow key string.

    Format: workflow:{transport_id}
    """
    return f"workflow:{transport_id}"


def hash_id(key: str) -> str:
    """Hash a key string into a short, stable hex id.

    Args:
        key: The key string to hash.

    Returns:
        First 16 hex characters of the SHA-256 digest.
    """
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:ID_LENGTH]


def make_id(kind: str, name: str, file: str) -> str:
    """Deterministic component id from (kind, name, file)."""
    return hash_id(component_key(kind, name, file))


def workflow_id(transport_id: str) -> str:
    """Deterministic workflow id from its entry transport id."""
    return hash_id(workflow_key(transport_id))
