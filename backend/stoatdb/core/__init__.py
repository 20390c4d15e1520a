"""
Core utilities: credential handling and the bootstrap error taxonomy.
"""
from stoatdb.core.exceptions import (
    BootstrapError,
    StructuralError,
    ConstraintConflictError,
    UnexpectedSeedError,
)

__all__ = [
    "BootstrapError",
    "StructuralError",
    "ConstraintConflictError",
    "UnexpectedSeedError",
]
