"""
Services: seed users, the bootstrap orchestrator, deletion policy and queries.
"""
from stoatdb.services.bootstrap import (
    BootstrapOrchestrator,
    BootstrapReport,
    SeedOutcome,
    bootstrap,
)
from stoatdb.services.lifecycle import CascadePolicy, delete_channel, delete_message, delete_server
from stoatdb.services.seed import build_admin_user, build_system_user, provision_seed_users

__all__ = [
    "BootstrapOrchestrator",
    "BootstrapReport",
    "SeedOutcome",
    "bootstrap",
    "CascadePolicy",
    "delete_channel",
    "delete_message",
    "delete_server",
    "build_admin_user",
    "build_system_user",
    "provision_seed_users",
]
