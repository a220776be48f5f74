# app/services/v1/bootstrap.py
from sqlalchemy import select

from app.db import DbManager
from app.db.models import Admin
from common.logger import get_app_logger
from .credential_store import CredentialStore

logger = get_app_logger(__name__)


async def ensure_default_admin(db_manager: DbManager, email: str, password: str) -> bool:
    """
    Create the first admin account if no admin exists yet.
    Safe to run on every startup.

    Returns:
        True when an admin was created, False when one already existed
    """
    async with db_manager.session() as session:
        result = await session.execute(select(Admin.id).limit(1))
        if result.first() is not None:
            logger.debug("Admin account present, bootstrap skipped")
            return False

        admin = await CredentialStore(session).create_admin(email, password)
        logger.info("Default admin created", admin_id=admin.id, email=admin.email)
        return True


__all__ = ["ensure_default_admin"]
