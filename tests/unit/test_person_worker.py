from unittest.mock import MagicMock

import pytest

from photo_people.tasks.celery_app import celery_app
from photo_people.tasks.workers.person_worker import PersonTask, person_cleanup_task


@pytest.fixture
def db():
    return MagicMock()


@pytest.fixture
def person_service():
    return MagicMock()


@pytest.fixture
def task(mocker, db, person_service):
    mocker.patch.object(PersonTask, "get_db", return_value=db)
    mocker.patch.object(PersonTask, "get_service", return_value=person_service)
    return person_cleanup_task


def test_cleanup_is_scheduled_daily():
    schedule = celery_app.conf.beat_schedule["person-cleanup-daily"]

    assert schedule["task"] == person_cleanup_task.name == "tasks.person_cleanup"


def test_cleanup_task_reports_deleted_count(task, db, person_service):
    person_service.handle_person_cleanup.return_value = 2

    result = task()

    assert result["status"] == "completed"
    assert result["people_deleted"] == 2
    db.close.assert_called_once()


def test_cleanup_task_rolls_back_on_error(task, db, person_service):
    person_service.handle_person_cleanup.side_effect = RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        task()

    db.rollback.assert_called_once()
    db.close.assert_called_once()
