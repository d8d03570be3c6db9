# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Admin credential helper.

``--print-hash`` prints a hash for ``ADMIN_PASSWORD_HASH`` (config backend);
otherwise the credential is stored in the database named by ``DATABASE_URL``.
"""

from __future__ import annotations

import argparse
import getpass
import sys

from contactdesk.application.services.password_hashing import WerkzeugPasswordHasher
from contactdesk.domain.admins.exceptions import CredentialAlreadyExistsError
from contactdesk.infrastructure.audit import AuditAction, audit_log
from contactdesk.infrastructure.db import build_engine, build_session_factory, init_db
from contactdesk.infrastructure.repositories.admins import SqlAlchemyCredentialStore
from contactdesk.shared.config import DatabaseConfig


def _read_password(args: argparse.Namespace) -> str:
    if args.password:
        return args.password
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        raise SystemExit("Passwords do not match")
    return password


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the admin credential")
    parser.add_argument("username", nargs="?", help="Admin username (database mode)")
    parser.add_argument("--password", help="Password; prompted for when omitted")
    parser.add_argument(
        "--print-hash",
        action="store_true",
        help="Only print the password hash for ADMIN_PASSWORD_HASH",
    )
    args = parser.parse_args(argv)

    password = _read_password(args)
    if not password:
        parser.error("password must not be empty")

    hasher = WerkzeugPasswordHasher()
    if args.print_hash:
        print(hasher.hash(password))
        return 0

    if not args.username:
        parser.error("username is required unless --print-hash is given")

    engine = build_engine(DatabaseConfig())  # type: ignore[call-arg]
    init_db(engine)
    store = SqlAlchemyCredentialStore(build_session_factory(engine))
    try:
        credential = store.add(args.username, hasher.hash(password))
    except CredentialAlreadyExistsError:
        print(f"Credential '{args.username}' already exists", file=sys.stderr)
        return 1
    finally:
        engine.dispose()

    audit_log(
        AuditAction.CREDENTIAL_CREATED,
        user_id=credential.id,
        details={"username": credential.username, "source": "cli"},
    )
    print(f"Created admin credential '{credential.username}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
