"""
Bootstrap orchestrator.

Brings a store up to the expected layout in three steps, each safe to
repeat and to run next to live application traffic:

1. create the missing collections
2. create the missing indexes
3. insert the admin and System seed users, unless they already exist

The run stops at the first fatal error. Since every step is idempotent,
running the whole bootstrap again finishes whatever was left.
"""
import logging
from typing import Optional

from pydantic import BaseModel, Field
from pymongo.database import Database

from stoatdb.core.exceptions import UnexpectedSeedError
from stoatdb.database.collections import ensure_collections
from stoatdb.database.documents import InsertStatus, insert_record
from stoatdb.database.indexes import ensure_indexes
from stoatdb.models.user import User
from stoatdb.services.seed import provision_seed_users

logger = logging.getLogger(__name__)


class SeedOutcome(BaseModel):
    """What happened to one seed user."""
    username: str
    status: InsertStatus
    reason: Optional[str] = None


class BootstrapReport(BaseModel):
    """Human-readable status of a bootstrap run."""
    database: str
    collections_created: list[str] = Field(default_factory=list)
    collections_existing: list[str] = Field(default_factory=list)
    indexes: list[str] = Field(default_factory=list)
    seeds: list[SeedOutcome] = Field(default_factory=list)
    success: bool = False

    def summary(self) -> str:
        """Render the report as a few lines of text."""
        lines = [
            f"Bootstrap of '{self.database}': {'OK' if self.success else 'FAILED'}",
            f"  collections: {len(self.collections_created)} created, "
            f"{len(self.collections_existing)} already present",
            f"  indexes ensured: {len(self.indexes)}",
        ]
        for seed in self.seeds:
            line = f"  seed user {seed.username}: {seed.status.value}"
            if seed.reason:
                line += f" ({seed.reason})"
            lines.append(line)
        return "\n".join(lines)


class BootstrapOrchestrator:
    """Applies the collection registry, the indexes and the seed users to a database."""

    def __init__(self, db: Database):
        """Initialize with the target database."""
        self.db = db
        self.report = BootstrapReport(database=db.name)

    def ensure_collections(self) -> None:
        """Create the missing collections and record which ones existed."""
        created = ensure_collections(self.db)
        self.report.collections_created = [name for name, new in created.items() if new]
        self.report.collections_existing = [name for name, new in created.items() if not new]
        logger.info(
            "✓ Collections ensured (%d created, %d already present)",
            len(self.report.collections_created),
            len(self.report.collections_existing),
        )

    def ensure_indexes(self) -> None:
        """Create the missing indexes."""
        self.report.indexes = ensure_indexes(self.db)
        logger.info("✓ Indexes ensured (%d)", len(self.report.indexes))

    def seed_user(self, user: User) -> SeedOutcome:
        """
        Insert one seed user.

        A unique-index rejection on username or email means the seed is
        already there: that is expected on every run after the first and is
        only reported. Anything else is fatal.

        Raises:
            UnexpectedSeedError: If the insert failed for any other reason
        """
        result = insert_record(self.db, user)
        outcome = SeedOutcome(username=user.username, status=result.status, reason=result.reason)
        self.report.seeds.append(outcome)

        if result.status == InsertStatus.INSERTED:
            logger.info("✓ Seed user %s created", user.username)
            if user.privileged:
                logger.warning(
                    "Seed user %s has a placeholder password: set a new one before use",
                    user.username,
                )
        elif result.status == InsertStatus.ALREADY_EXISTS:
            logger.info("Seed user %s already exists, leaving it untouched", user.username)
        else:
            raise UnexpectedSeedError(user.username, result.reason or "unknown error")

        return outcome

    def seed_users(self) -> None:
        """Insert every seed user, administrator first."""
        for user in provision_seed_users():
            self.seed_user(user)

    def run(self) -> BootstrapReport:
        """
        Run all bootstrap steps in order.

        Raises:
            StructuralError: Collection or index creation failed
            ConstraintConflictError: Existing data violates a unique index
            UnexpectedSeedError: A seed user could not be inserted
        """
        logger.info("Bootstrapping database %s...", self.db.name)
        self.ensure_collections()
        self.ensure_indexes()
        self.seed_users()
        self.report.success = True
        return self.report


def bootstrap(db: Database) -> BootstrapReport:
    """Bootstrap ``db`` and return the report. See ``BootstrapOrchestrator.run``."""
    return BootstrapOrchestrator(db).run()
