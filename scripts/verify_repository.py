#!/usr/bin/env python3
"""
Verify the users repository works correctly against a live MongoDB.

Verification script that validates:
1. Repository can be initialized
2. Repository can connect to MongoDB
3. Insert / read / update / delete work on a throwaway document
4. The name index can be created (idempotently)

Usage:
    python scripts/verify_repository.py

    # Against a specific server
    python scripts/verify_repository.py --uri mongodb://127.0.0.1:27017
"""

import argparse
import asyncio
import logging
import os
import sys
import uuid

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def verify_repository_initialization() -> dict:
    """Verify repository can be initialized."""
    logger.info("\n=== Step 1: Repository Initialization ===")

    try:
        from blog_users.common.repositories import get_user_repository, reset_user_repository

        reset_user_repository()

        repo = get_user_repository()
        repo_type = type(repo).__name__

        logger.info(f"  ✓ Repository initialized: {repo_type}")
        logger.info(f"    {repo.get_connection_info()}")

        return {
            "success": True,
            "repository_type": repo_type,
        }
    except Exception as e:
        logger.error(f"  ✗ Failed to initialize repository: {e}")
        return {
            "success": False,
            "error": str(e),
        }


async def verify_connection() -> dict:
    """Verify repository can reach MongoDB."""
    logger.info("\n=== Step 2: MongoDB Connection ===")

    from blog_users.common.repositories import get_user_repository

    repo = get_user_repository()
    status = await repo.check_connection_status()

    if not status.ok:
        logger.error(f"  ✗ Connection failed: {status.error_type}: {status.error}")
        return {"success": False, "error": status.error}

    count = await repo.count_users()
    logger.info(f"  ✓ Connected: {count} documents in {repo.namespace}")
    return {"success": True, "document_count": count}


async def verify_round_trip() -> dict:
    """Verify insert, read, update and delete on a throwaway user."""
    logger.info("\n=== Step 3: CRUD Round Trip ===")

    from blog_users.common.repositories import get_user_repository
    from blog_users.common.types import User

    repo = get_user_repository()
    marker = f"verify-{uuid.uuid4().hex[:8]}"
    user = User(name=marker, age=1, blog="verify.example", location="nowhere")

    try:
        await repo.insert_user(user)
        if user.id is None:
            raise RuntimeError("Insert did not assign an _id")
        logger.info(f"  ✓ Inserted {user.id}")

        found = await repo.get_users_by_field("name", marker)
        if len(found) != 1 or found[0].id != user.id:
            raise RuntimeError("Read-back mismatch")
        logger.info("  ✓ Read back by name")

        if not await repo.update_user(user.id, "blog", "verified.example"):
            raise RuntimeError("Update reported no change")
        if await repo.update_user(user.id, "blog", "verified.example"):
            raise RuntimeError("No-op update reported a change")
        logger.info("  ✓ Update / no-op update")

        return {"success": True}
    except Exception as e:
        logger.error(f"  ✗ Round trip failed: {e}")
        return {"success": False, "error": str(e)}
    finally:
        if user.id is not None:
            deleted = await repo.delete_user_by_id(user.id)
            logger.info(f"  {'✓' if deleted else '⚠'} Cleanup delete: {deleted}")


async def verify_index() -> dict:
    """Verify the name index can be created twice."""
    logger.info("\n=== Step 4: Name Index ===")

    from blog_users.common.repositories import get_user_repository

    repo = get_user_repository()
    try:
        first = await repo.create_index_on_name_field()
        second = await repo.create_index_on_name_field()
        logger.info(f"  ✓ Index {first} (repeat: {second})")
        return {"success": first == second, "index_name": first}
    except Exception as e:
        logger.error(f"  ✗ Index creation failed: {e}")
        return {"success": False, "error": str(e)}


async def run_checks() -> dict:
    from blog_users.common.repositories import close_user_repository

    results = {}
    try:
        results["connection"] = await verify_connection()
        if not results["connection"]["success"]:
            return results
        results["round_trip"] = await verify_round_trip()
        results["index"] = await verify_index()
    finally:
        await close_user_repository()
    return results


def main():
    parser = argparse.ArgumentParser(description="Verify users repository implementation")
    parser.add_argument("--uri", help="MongoDB URI (overrides MONGODB_URI)")
    args = parser.parse_args()

    if args.uri:
        os.environ["MONGODB_URI"] = args.uri

    logger.info("=" * 60)
    logger.info("Users Repository Verification")
    logger.info("=" * 60)

    results = {}

    results["initialization"] = verify_repository_initialization()
    if not results["initialization"]["success"]:
        logger.error("\n❌ VERIFICATION FAILED: Could not initialize repository")
        sys.exit(1)

    results.update(asyncio.run(run_checks()))

    # Summary
    logger.info("\n" + "=" * 60)
    logger.info("VERIFICATION SUMMARY")
    logger.info("=" * 60)

    all_passed = all(r.get("success", False) for r in results.values())

    for name, result in results.items():
        status = "✓ PASS" if result.get("success", False) else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("=" * 60)
    if all_passed:
        logger.info("✅ ALL VERIFICATIONS PASSED")
    else:
        logger.info("❌ SOME VERIFICATIONS FAILED")
        sys.exit(1)


if __name__ == "__main__":
    main()
