"""
Create the canonical roles (super_admin/100, admin/80, user/40) and merge
duplicate or misnamed roles into them. Safe to run repeatedly:

  python -m app.scripts.seed_roles

Role changes apply on each affected user's next request.
"""

import logging
import sys

from app.core.database import SessionLocal
from app.core.errors import StoreError
from app.services.roles import ensure_default_roles

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    db = SessionLocal()
    try:
        for line in ensure_default_roles(db):
            logger.info(line)
        return 0
    except StoreError as e:
        logger.exception("Role cleanup failed: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
