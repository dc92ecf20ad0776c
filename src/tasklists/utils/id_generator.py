import uuid


def new_id() -> str:
    """Opaque identifier used by every collection."""
    return uuid.uuid4().hex
