"""Job dispatch boundary.

The person service hands typed job descriptors to a dispatcher and never
waits for them. Execution is at-least-once and unordered across job names.
"""
from abc import ABC, abstractmethod
from typing import List
import logging

from celery import Celery

from photo_people.schemas.job import JobItem, JobName

logger = logging.getLogger(__name__)


class JobDispatcher(ABC):
    """Accepts job descriptors for eventual execution."""

    @abstractmethod
    def queue(self, item: JobItem) -> None:
        """Enqueue a job."""


def task_name(name: JobName) -> str:
    """Celery task name registered for a job."""
    return f"tasks.{name.value}"


class CeleryJobDispatcher(JobDispatcher):
    """Sends jobs to Celery workers by task name."""

    def __init__(self, app: Celery = None):
        if app is None:
            from photo_people.tasks.celery_app import celery_app
            app = celery_app
        self.app = app

    def queue(self, item: JobItem) -> None:
        result = self.app.send_task(
            task_name(item.name),
            kwargs=item.data.model_dump(mode='json'),
        )
        logger.debug(f"Queued {item.name.value} as task {result.id}")


class InMemoryJobDispatcher(JobDispatcher):
    """Records queued jobs in order."""

    def __init__(self):
        self.jobs: List[JobItem] = []

    def queue(self, item: JobItem) -> None:
        self.jobs.append(item)

    def named(self, name: JobName) -> List[JobItem]:
        return [job for job in self.jobs if job.name == name]

    def clear(self) -> None:
        self.jobs.clear()
