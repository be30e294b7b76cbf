#!/usr/bin/env python3
"""Remove unused expired invites from the local invite store.

Meant for a periodic job (cron, systemd timer). Used invites are kept.

Usage:
    python scripts/cleanup_invites.py [--dry-run]
"""

import argparse
import asyncio
import sys

import logfire

from gate.application.usecase.invite import (
    CleanupInvitesRequest,
    CleanupInvitesUseCase,
)
from gate.config import Settings
from gate.domain.error import InviteStorageError
from gate.util.di.container import create_container
from gate.util.logging import setup_logging
from gate.util.observability import configure_logfire


async def cleanup(dry_run: bool) -> int:
    """Sweep the local store; returns the number of invites removed."""
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(CleanupInvitesUseCase)
            response = await use_case.execute(CleanupInvitesRequest(dry_run=dry_run))
            return response.local_removed
    finally:
        await container.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Count expired invites without removing them",
    )
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        removed = asyncio.run(cleanup(args.dry_run))
    except InviteStorageError as e:
        logfire.error("Invite cleanup failed", error=str(e))
        print(f"Cleanup failed: {e}", file=sys.stderr)
        return 1

    verb = "Would remove" if args.dry_run else "Removed"
    print(f"{verb} {removed} expired invite(s) from {settings.invites_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
