"""
Person API Tests
================

HTTP surface over the person service, backed by in-memory adapters.
"""

from uuid import uuid4

import pytest

from photo_people.app.config import settings
from photo_people.models.enums import AssetType
from photo_people.schemas.job import JobName


BASE = f"{settings.API_V1_PREFIX}/person"
THUMB = "thumbs/person.jpeg"


@pytest.fixture
def person(repo, auth_user):
    person = repo.add_person(auth_user.id, name="Person 1", thumbnail_path=THUMB)
    repo.add_face(repo.add_asset(auth_user.id), person)
    return person


def test_requires_authentication(anonymous_client):
    response = anonymous_client.get(BASE)

    assert response.status_code == 401


def test_list_people(client, repo, auth_user, person):
    hidden = repo.add_person(auth_user.id, thumbnail_path=THUMB, is_hidden=True)
    repo.add_face(repo.add_asset(auth_user.id), hidden)

    response = client.get(BASE)
    with_hidden = client.get(BASE, params={"with_hidden": "true"})

    assert response.status_code == 200
    assert response.json() == {
        "total": 1,
        "visible": 1,
        "people": [{
            "id": str(person.id),
            "name": "Person 1",
            "birth_date": None,
            "thumbnail_path": THUMB,
            "is_hidden": False,
        }],
    }
    body = with_hidden.json()
    assert (body["total"], body["visible"]) == (2, 1)
    assert [p["id"] for p in body["people"]] == [str(person.id), str(hidden.id)]


def test_get_person(client, person):
    response = client.get(f"{BASE}/{person.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Person 1"


def test_get_person_not_found(client):
    response = client.get(f"{BASE}/{uuid4()}")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_update_person(client, jobs, person):
    response = client.put(f"{BASE}/{person.id}", json={"name": "Renamed", "birth_date": "1976-06-30"})

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["birth_date"] == "1976-06-30"
    assert [j.name for j in jobs.jobs] == [JobName.SEARCH_INDEX_ASSET]


def test_update_unknown_person_is_bad_request(client):
    response = client.put(f"{BASE}/{uuid4()}", json={"name": "Nobody"})

    assert response.status_code == 400


def test_update_rejects_future_birth_date(client, person):
    response = client.put(f"{BASE}/{person.id}", json={"birth_date": "2999-01-01"})

    assert response.status_code == 422


def test_bulk_update(client, person):
    missing = uuid4()

    response = client.put(BASE, json={"people": [
        {"id": str(person.id), "is_hidden": True},
        {"id": str(missing), "name": "Ghost"},
    ]})

    assert response.status_code == 200
    assert response.json() == [
        {"id": str(person.id), "success": True, "error": None},
        {"id": str(missing), "success": False, "error": "not_found"},
    ]


def test_thumbnail(client, storage, person):
    storage.blobs[THUMB] = b"\xff\xd8\xff\xe0thumbnail"

    response = client.get(f"{BASE}/{person.id}/thumbnail")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    assert response.content == b"\xff\xd8\xff\xe0thumbnail"


def test_thumbnail_missing(client, repo, storage, auth_user):
    person = repo.add_person(auth_user.id, name="No Thumb")

    response = client.get(f"{BASE}/{person.id}/thumbnail")

    assert response.status_code == 404
    assert storage.opened == []


def test_assets_and_statistics(client, repo, auth_user, person):
    repo.add_face(repo.add_asset(auth_user.id, AssetType.VIDEO), person)

    assets = client.get(f"{BASE}/{person.id}/assets")
    stats = client.get(f"{BASE}/{person.id}/statistics")

    assert assets.status_code == 200
    assert len(assets.json()) == 2
    assert stats.json() == {"images": 1, "videos": 1, "total": 2}


def test_merge(client, repo, auth_user, person):
    secondary = repo.add_person(auth_user.id, name="Duplicate")
    repo.add_face(repo.add_asset(auth_user.id), secondary)
    missing = uuid4()

    response = client.post(
        f"{BASE}/{person.id}/merge",
        json={"ids": [str(secondary.id), str(missing)]}
    )

    assert response.status_code == 200
    assert response.json() == [
        {"id": str(secondary.id), "success": True, "error": None},
        {"id": str(missing), "success": False, "error": "not_found"},
    ]
    assert len(repo.faces_of(person.id)) == 2


def test_merge_unknown_primary(client, person):
    response = client.post(f"{BASE}/{uuid4()}/merge", json={"ids": [str(person.id)]})

    assert response.status_code == 400


def test_health(client):
    response = client.get("/health")

    assert response.json()["status"] == "healthy"
