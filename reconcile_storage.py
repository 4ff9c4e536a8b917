#!/usr/bin/env python3
"""
Storage reconciliation script for the File Vault backend.

Compares the metadata rows in the database with the files in the upload
directory and reports (or, with --apply, removes) both kinds of orphans:
rows whose file is gone and files nobody references.
"""

import argparse
import asyncio
import sys

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.database import AsyncSessionLocal, engine
from app.domains.file.service import FileService
from app.domains.file.storage import LocalFileStorage


async def reconcile(upload_dir: str, apply: bool, grace_seconds: float | None = None) -> int:
    async with AsyncSessionLocal() as session:
        service = FileService(session, storage=LocalFileStorage(upload_dir))
        report = await service.reconcile_orphans(apply=apply, grace_seconds=grace_seconds)
    await engine.dispose()

    print(f"Rows without files: {len(report.missing_files)}")
    for file_id in report.missing_files:
        print(f"  - {file_id}")
    print(f"Files without rows: {len(report.untracked_files)}")
    for path in report.untracked_files:
        print(f"  - {path}")

    if report.is_consistent:
        print("✅ Storage and metadata are consistent")
        return 0
    if apply:
        print("🧹 Orphans removed")
        return 0
    print("⚠️  Run again with --apply to remove the orphans")
    return 1


def main():
    parser = argparse.ArgumentParser(description="Reconcile stored files with their metadata")
    parser.add_argument(
        "--upload-dir",
        default=settings.upload_dir,
        help="Upload directory to scan (defaults to UPLOAD_DIR)",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Delete orphaned rows and untracked files instead of only reporting them",
    )
    parser.add_argument(
        "--grace-seconds",
        type=float,
        default=None,
        help="Ignore unreferenced files younger than this (defaults to ORPHAN_GRACE_SECONDS)",
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(reconcile(args.upload_dir, args.apply, args.grace_seconds)))


if __name__ == "__main__":
    main()
