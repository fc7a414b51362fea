"""
Person Maintenance Celery Workers
=================================

Scheduled tasks keeping person records consistent with their faces.

Tasks:
- Cleanup of people without faces
"""

from typing import Dict, Any
import logging
import time
import traceback

from celery import Task
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from photo_people.tasks.celery_app import celery_app
from photo_people.db.base import SessionLocal
from photo_people.repositories.person_repo import PersonRepository
from photo_people.services.jobs import CeleryJobDispatcher
from photo_people.services.person_service import PersonService
from photo_people.services.storage.s3 import S3StorageRepository

logger = logging.getLogger(__name__)


# =============================================================================
# Base Task Class
# =============================================================================

class PersonTask(Task):
    """Base task for person operations."""

    autoretry_for = (SQLAlchemyError,)
    retry_kwargs = {'max_retries': 3}
    retry_backoff = True
    retry_backoff_max = 600
    retry_jitter = True

    def get_db(self) -> Session:
        """Get database session."""
        return SessionLocal()

    def get_service(self, db: Session) -> PersonService:
        """Build a person service bound to the session."""
        return PersonService(
            repository=PersonRepository(db),
            storage=S3StorageRepository(),
            jobs=CeleryJobDispatcher(self.app),
        )

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        """Handle task failure."""
        logger.error(
            f"Task {task_id} failed: {str(exc)}",
            extra={
                "task_id": task_id,
                "traceback": str(einfo) if einfo else traceback.format_exc()
            }
        )

    def on_success(self, retval, task_id, args, kwargs):
        """Handle task success."""
        logger.info(
            f"Task {task_id} completed successfully",
            extra={
                "task_id": task_id,
                "result": retval
            }
        )


# =============================================================================
# Cleanup Task
# =============================================================================

@celery_app.task(
    bind=True,
    base=PersonTask,
    name='tasks.person_cleanup'
)
def person_cleanup_task(self) -> Dict[str, Any]:
    """
    Delete people with no faces across all owners (runs daily).

    Returns:
        Cleanup summary
    """
    db = self.get_db()
    start_time = time.time()

    try:
        logger.info("Starting person cleanup")

        deleted_count = self.get_service(db).handle_person_cleanup()

        result = {
            'status': 'completed',
            'people_deleted': deleted_count,
            'processing_time': time.time() - start_time
        }

        logger.info(f"Cleaned up {deleted_count} people without faces")

        return result

    except Exception as e:
        db.rollback()
        logger.error(f"Person cleanup failed: {str(e)}", exc_info=True)
        raise

    finally:
        db.close()
