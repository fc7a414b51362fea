from celery import Celery
from celery.schedules import crontab

from photo_people.app.config import settings

# Create Celery instance and include explicit task modules
celery_app = Celery(
    'photo_people',
    include=[
        'photo_people.tasks.workers.person_worker',
    ]
)

celery_app.conf.update(
    broker_url=settings.CELERY_BROKER_URL,
    result_backend=settings.CELERY_RESULT_BACKEND,
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=30 * 60,  # 30 minutes hard limit
)

celery_app.conf.beat_schedule = {
    'person-cleanup-daily': {
        'task': 'tasks.person_cleanup',
        'schedule': crontab(hour=settings.PERSON_CLEANUP_HOUR, minute=0),
    },
}
