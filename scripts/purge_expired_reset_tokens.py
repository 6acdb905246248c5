"""
Maintenance script deleting expired password reset tokens.

Meant to run from cron or a scheduled job, outside the FastAPI app lifespan.
"""

import sys
import os

# Add project root to path to allow imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger

from reset_api.database.database import get_session
from reset_api.services.password_reset import purge_expired_tokens
from reset_api.utils.logger import setup_logging


def run_purge() -> int:
    """
    Delete expired reset tokens, exiting with status 1 on failure.

    Returns:
        int: Number of deleted tokens.
    """
    setup_logging()
    logger.info("Starting expired reset token purge...")

    session_generator = get_session()
    db = next(session_generator)

    try:
        deleted = purge_expired_tokens(db)
        logger.info("Expired reset token purge completed successfully.")
        return deleted
    except Exception as e:
        db.rollback()
        logger.opt(exception=True).error(
            f"A critical error occurred during the purge: {e}"
        )
        sys.exit(1)
    finally:
        session_generator.close()


if __name__ == "__main__":
    run_purge()
