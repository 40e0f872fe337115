import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


async def check_mongodb(db: AsyncIOMotorDatabase) -> str:
    """
    Vérifie la connexion MongoDB

    Returns:
        "ok" si connecté, message d'erreur sinon
    """
    try:
        await db.command("ping")
        return "ok"
    except Exception as e:
        logger.error(f"MongoDB health check failed: {e}")
        return f"error: {str(e)}"
