#!/usr/bin/env python
"""Create an admin account from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME.

Registration through the API only ever creates standard users, so this is
the way to seed the first admin.
"""
import logging
import os
import sys

from task_tracker.database import create_tables, get_session
from task_tracker.errors import DuplicateEmailError
from task_tracker.logging_setup import setup_logging
from task_tracker.models import UserRole
from task_tracker.services.passwords import get_password_hash
from task_tracker.stores import UserStore

logger = logging.getLogger("task_tracker.add_user")


def main() -> int:
    setup_logging()
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    name = os.getenv("ADMIN_NAME", "Admin")
    if not email or not password:
        logger.error("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return 1

    # Create tables if not exist
    create_tables()

    with get_session() as db:
        store = UserStore(db)
        if store.get_by_email(email) is not None:
            logger.info("User %s already exists", email)
            return 0
        try:
            user = store.create(
                email=email,
                hashed_password=get_password_hash(password),
                name=name,
                role=UserRole.ADMIN,
            )
        except DuplicateEmailError:
            logger.info("User %s already exists", email)
            return 0
        logger.info("Admin user created: %s (%s)", user.email, user.id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
