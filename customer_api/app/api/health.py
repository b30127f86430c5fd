import logging
from fastapi import APIRouter, Depends
from ..database import Database
from ..dependencies.database import get_database
from ..services.health import check_system_health
from ..utils import create_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])

@router.get("/health")
def health_check(db: Database = Depends(get_database)):
    """
    Liveness check.

    Answers 503 when the database cannot be reached.
    """
    health_data = check_system_health(db)
    return create_response(data=health_data, message="OK")
