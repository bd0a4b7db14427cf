"""Tests for product feedback submission."""

import pytest

URL = "/api/v1/feedback"


@pytest.fixture()
def headers(free_user, auth_headers):
    return auth_headers(free_user)


def test_submit(client, headers):
    body = {
        "type": "resource_quality",
        "category": "resources",
        "content": "The NumPy link is outdated",
        "rating": 2,
        "metadata": {"skill": "python-ml"},
    }
    res = client.post(URL, json=body, headers=headers)
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["status"] == "pending"
    assert data["metadata"] == {"skill": "python-ml"}
    assert data["rating"] == 2


@pytest.mark.parametrize("patch", [
    {"type": "praise"},
    {"category": "billing"},
    {"content": ""},
    {"rating": 6},
])
def test_invalid_fields(client, headers, patch):
    body = {"type": "bug", "category": "ui_ux", "content": "Button overlaps"}
    body.update(patch)
    res = client.post(URL, json=body, headers=headers)
    assert res.status_code == 422
    assert set(patch) <= set(res.get_json()["error"]["errors"])


def test_list_only_own(client, headers, pro_user, auth_headers):
    client.post(URL, json={"type": "bug", "category": "other", "content": "one"}, headers=headers)
    client.post(URL, json={"type": "general", "category": "other", "content": "two"},
                headers=headers)
    client.post(URL, json={"type": "general", "category": "other", "content": "theirs"},
                headers=auth_headers(pro_user))

    res = client.get(URL, headers=headers)
    body = res.get_json()
    assert body["total"] == 2
    assert [f["content"] for f in body["data"]] == ["two", "one"]


def test_requires_auth(client):
    res = client.post(URL, json={"type": "bug", "category": "other", "content": "x"})
    assert res.status_code == 401
