#!/usr/bin/env python3
"""
Replay the users repository demo scenario.

This script:
1. Inserts Nikola and Vanja, lists and filters them
2. Reads the first page of two users
3. Updates Nikola's blog
4. Inserts and deletes Simona
5. Deletes all users

Usage:
    python scripts/run_user_demo.py [--uri mongodb://127.0.0.1:27017]

⚠️ The last step empties the users collection.
"""

import sys
import argparse
import asyncio
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from blog_users.common.config import Config
from blog_users.common.logger import get_logger, setup_logging
from blog_users.common.repositories import MongoUserRepository
from blog_users.common.types import User

logger = get_logger(__name__, operation="demo")


def _names(users) -> str:
    return ", ".join(u.name for u in users) or "(none)"


async def run_demo(uri: str) -> int:
    async with MongoUserRepository(
        uri,
        database=Config.BLOG_DATABASE,
        collection=Config.USERS_COLLECTION,
        server_selection_timeout_ms=Config.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    ) as repo:
        if not await repo.check_connection():
            logger.error(f"❌ Cannot reach MongoDB at {repo.get_connection_info()['url']}")
            return 1

        await repo.insert_user(User(name="Nikola", age=30, blog="rubikscode.net", location="Beograd"))
        await repo.insert_user(User(name="Vanja", age=27, blog="eventroom.net", location="Beograd"))
        logger.info(f"All users: {_names(await repo.get_all_users())}")

        nikola = (await repo.get_users_by_field("name", "Nikola"))[0]
        logger.info(f"Found by name: {nikola}")
        logger.info(f"First page: {_names(await repo.get_users(0, 2))}")

        updated = await repo.update_user(nikola.id, "blog", "Rubik's Code")
        nikola = (await repo.get_users_by_field("name", "Nikola"))[0]
        logger.info(f"Updated: {updated}, blog is now {nikola.blog!r}")

        await repo.insert_user(User(name="Simona", age=0, blog="babystuff.com", location="Beograd"))
        logger.info(f"All users: {_names(await repo.get_all_users())}")

        simona = (await repo.get_users_by_field("name", "Simona"))[0]
        deleted = await repo.delete_user_by_id(simona.id)
        logger.info(f"Deleted Simona: {deleted}; remaining: {_names(await repo.get_all_users())}")

        removed = await repo.delete_all_users()
        logger.info(f"Deleted {removed} users; remaining: {_names(await repo.get_all_users())}")

    return 0


def main():
    parser = argparse.ArgumentParser(description="Run the users repository demo scenario")
    parser.add_argument("--uri", default=Config.MONGODB_URI, help="MongoDB connection string")
    args = parser.parse_args()

    setup_logging()
    return asyncio.run(run_demo(args.uri))


if __name__ == "__main__":
    sys.exit(main())
