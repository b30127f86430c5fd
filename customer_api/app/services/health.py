import logging
from ..database import Database
from .error_handling import ServiceError

logger = logging.getLogger(__name__)

def check_system_health(db: Database):
    try:
        version = db.ping()
    except ServiceError as e:
        logger.error(f"Health check failed: {e.message}")
        raise ServiceError("Database unavailable", status_code=503, error_code="UNHEALTHY")

    return {
        "database": {
            "status": "connected",
            "version": version
        }
    }
