"""Ownership policy for mutating routes.

Only the user recorded as a post's author may update or delete it.
Ids may arrive as str, UUID, int, bytes, or as an object carrying an
`id` (the current user, a loaded relationship), so both sides are
reduced to a canonical string before comparing.
"""

import uuid
from typing import Any

from inkpost.errors import Forbidden


def canonical_id(handle: Any) -> str:
    """Canonical string form of an id handle ("" for None)."""
    if handle is None:
        return ""
    if isinstance(handle, (bytes, bytearray)):
        return bytes(handle).hex()
    if isinstance(handle, (str, int, uuid.UUID)):
        return str(handle)
    if hasattr(handle, "id"):
        return canonical_id(handle.id)
    return str(handle)


def is_owner(resource: Any, identity: Any) -> bool:
    owner = canonical_id(resource.author_id)
    return owner != "" and owner == canonical_id(identity)


def ensure_owner(resource: Any, identity: Any) -> None:
    """Raise Forbidden unless identity is the resource's author."""
    if not is_owner(resource, identity):
        raise Forbidden("Unauthorized")
