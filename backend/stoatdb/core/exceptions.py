"""
Errors raised while bootstrapping the store.

All of them are fatal: the run stops at the first one and the invoking
process gets a failure signal. A seed user that already exists is not an
error and never shows up here (see ``InsertStatus.ALREADY_EXISTS``).
"""
from typing import Any, Optional


class BootstrapError(Exception):
    """Base class for fatal bootstrap failures."""


class StructuralError(BootstrapError):
    """
    A collection or index could not be created for a reason other than
    "it already exists" (store unreachable, permission denied, an index
    with the same name but different options, ...).
    """

    def __init__(self, message: str, collection: Optional[str] = None):
        super().__init__(message)
        self.collection = collection


class ConstraintConflictError(BootstrapError):
    """
    A uniqueness index cannot be built because documents already in the
    collection violate it. Needs manual cleanup before re-running.
    """

    def __init__(
        self,
        collection: str,
        fields: list[str],
        conflicts: Optional[list[dict[str, Any]]] = None,
    ):
        self.collection = collection
        self.fields = fields
        self.conflicts = conflicts or []

        message = (
            f"Cannot create unique index on {collection}({', '.join(fields)}): "
            f"existing documents contain duplicate values"
        )
        if self.conflicts:
            sample = "; ".join(
                f"{c['value']} x{c['count']}" for c in self.conflicts
            )
            message += f" [{sample}]"
        super().__init__(message)


class UnexpectedSeedError(BootstrapError):
    """A seed user insert failed for any reason other than already existing."""

    def __init__(self, username: str, reason: str):
        self.username = username
        self.reason = reason
        super().__init__(f"Failed to create seed user '{username}': {reason}")
