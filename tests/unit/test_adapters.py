"""
Adapter Tests
=============

Celery job dispatcher and S3 blob reader against mocked clients.
"""

from io import BytesIO
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

from photo_people.core.errors import NotFoundError, StorageError
from photo_people.schemas.job import (
    AssetFaceJob,
    AssetIdsJob,
    BoundingBox,
    DeleteFilesJob,
    FaceThumbnailJob,
    JobItem,
    JobName,
)
from photo_people.services.jobs import CeleryJobDispatcher, InMemoryJobDispatcher, task_name
from photo_people.services.storage.s3 import S3StorageRepository


# ============================================================================
# Job dispatch
# ============================================================================

@pytest.fixture
def celery_app():
    app = MagicMock()
    app.send_task.return_value = MagicMock(id="task-1")
    return app


def test_task_names():
    assert task_name(JobName.SEARCH_INDEX_ASSET) == "tasks.search-index-asset"
    assert task_name(JobName.DELETE_FILES) == "tasks.delete-files"


def test_celery_dispatcher_sends_thumbnail_job(celery_app):
    asset_id, person_id = uuid4(), uuid4()
    dispatcher = CeleryJobDispatcher(celery_app)

    dispatcher.queue(JobItem(
        name=JobName.GENERATE_PERSON_THUMBNAIL,
        data=FaceThumbnailJob(
            asset_id=asset_id,
            person_id=person_id,
            bounding_box=BoundingBox(x1=1, x2=3, y1=2, y2=4),
            image_width=640,
            image_height=480,
        ),
    ))

    celery_app.send_task.assert_called_once_with(
        "tasks.generate-person-thumbnail",
        kwargs={
            "asset_id": str(asset_id),
            "person_id": str(person_id),
            "bounding_box": {"x1": 1, "x2": 3, "y1": 2, "y2": 4},
            "image_width": 640,
            "image_height": 480,
        },
    )


def test_celery_dispatcher_serializes_payloads(celery_app):
    asset_id, person_id = uuid4(), uuid4()
    dispatcher = CeleryJobDispatcher(celery_app)

    dispatcher.queue(JobItem(name=JobName.SEARCH_INDEX_ASSET, data=AssetIdsJob(ids=[asset_id])))
    dispatcher.queue(JobItem(
        name=JobName.SEARCH_REMOVE_FACE,
        data=AssetFaceJob(asset_id=asset_id, person_id=person_id),
    ))
    dispatcher.queue(JobItem(name=JobName.DELETE_FILES, data=DeleteFilesJob(files=["a.jpeg"])))

    sent = [(c.args[0], c.kwargs["kwargs"]) for c in celery_app.send_task.call_args_list]
    assert sent == [
        ("tasks.search-index-asset", {"ids": [str(asset_id)]}),
        ("tasks.search-remove-face", {"asset_id": str(asset_id), "person_id": str(person_id)}),
        ("tasks.delete-files", {"files": ["a.jpeg"]}),
    ]


def test_in_memory_dispatcher_records_order():
    dispatcher = InMemoryJobDispatcher()
    first = JobItem(name=JobName.DELETE_FILES, data=DeleteFilesJob(files=["a"]))
    second = JobItem(name=JobName.SEARCH_INDEX_ASSET, data=AssetIdsJob(ids=[]))

    dispatcher.queue(first)
    dispatcher.queue(second)

    assert dispatcher.jobs == [first, second]
    assert dispatcher.named(JobName.DELETE_FILES) == [first]
    dispatcher.clear()
    assert dispatcher.jobs == []


# ============================================================================
# S3 blob reader
# ============================================================================

@pytest.fixture
def s3_client():
    return MagicMock()


def test_open_read_stream(s3_client):
    s3_client.get_object.return_value = {"Body": BytesIO(b"jpeg"), "ContentLength": 4}
    storage = S3StorageRepository(s3_client=s3_client, bucket_name="bucket")

    stream = storage.open_read_stream("thumbs/a.jpeg", "image/jpeg")

    s3_client.get_object.assert_called_once_with(Bucket="bucket", Key="thumbs/a.jpeg")
    assert stream.content_type == "image/jpeg"
    assert stream.length == 4
    assert b"".join(stream.iter_chunks(chunk_size=2)) == b"jpeg"


def test_open_read_stream_missing_key(s3_client):
    s3_client.get_object.side_effect = ClientError(
        {"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject"
    )
    storage = S3StorageRepository(s3_client=s3_client, bucket_name="bucket")

    with pytest.raises(NotFoundError):
        storage.open_read_stream("thumbs/missing.jpeg", "image/jpeg")


def test_open_read_stream_other_error(s3_client):
    s3_client.get_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject"
    )
    storage = S3StorageRepository(s3_client=s3_client, bucket_name="bucket")

    with pytest.raises(StorageError):
        storage.open_read_stream("thumbs/a.jpeg", "image/jpeg")
