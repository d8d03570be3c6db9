# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactdesk.domain.admins.repositories import PasswordHasher, WritableCredentialStore
from contactdesk.infrastructure.audit import AuditAction, audit_log
from contactdesk.shared.config import AuthConfig
from contactdesk.shared.logging import logger


class AdminSetupError(Exception):
    pass


def require_config_credential(config: AuthConfig) -> tuple[str, str]:
    """Return the fixed admin pair, or fail when the config backend lacks one."""
    if not config.admin_username or not config.admin_password_hash:
        raise AdminSetupError(
            "CREDENTIAL_BACKEND=config requires ADMIN_USERNAME and ADMIN_PASSWORD_HASH; "
            "generate the hash with `python -m contactdesk.scripts.create_admin --print-hash`"
        )
    return config.admin_username, config.admin_password_hash


def setup_admin_credential(
    config: AuthConfig,
    store: WritableCredentialStore,
    hasher: PasswordHasher,
) -> bool:
    """Seed the database credential store from ADMIN_USERNAME / ADMIN_PASSWORD.

    Returns True when a credential was created.
    """
    if not config.admin_username or not config.admin_password:
        logger.info("admin_setup: no ADMIN_USERNAME/ADMIN_PASSWORD configured, skipping seed")
        return False

    if store.find_by_username(config.admin_username):
        logger.info(f"admin_setup: credential '{config.admin_username}' already present")
        return False

    try:
        credential = store.add(config.admin_username, hasher.hash(config.admin_password))
    except Exception as e:
        logger.error(f"admin_setup: failed to seed admin credential: {e}")
        raise AdminSetupError(f"Failed to seed admin credential: {e}") from e

    audit_log(
        AuditAction.CREDENTIAL_CREATED,
        user_id=credential.id,
        details={"username": credential.username, "source": "startup"},
    )
    return True


__all__ = ["AdminSetupError", "require_config_credential", "setup_admin_credential"]
