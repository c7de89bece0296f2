# tests/v1/test_constituencies.py
"""Tests for constituency, poll and admin endpoints."""

from fastapi import status

from charcha_manch.core.settings import settings
from charcha_manch.models import Post
from charcha_manch.services import constituencies


def test_list_area_names_is_sorted(client, db_session, constituency, constituency_payload, admin_headers) -> None:
    client.post("/api/v1/constituencies/admin/constituencies/add", json=constituency_payload("Aundh"), headers=admin_headers)

    response = client.get("/api/v1/constituencies/")
    assert response.status_code == status.HTTP_200_OK
    assert [item["area_name"] for item in response.json()] == ["Aundh", "Test Area"]


def test_get_by_area_name(client, constituency) -> None:
    response = client.get("/api/v1/constituencies/Test Area")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["area_name"] == "Test Area"
    assert data["vidhayak_info"]["party_name"] == "BJP"
    assert [d["id"] for d in data["dept_info"]] == ["health", "roads"]
    assert data["dept_info"][0]["survey_score"][0]["ratings"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}


def test_get_missing_area_is_not_found(client, constituency) -> None:
    response = client.get("/api/v1/constituencies/Atlantis")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "not_found"


def test_get_by_id(client, constituency) -> None:
    response = client.get(f"/api/v1/constituencies/id/{constituency.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == constituency.id


def test_paginated_listing(client, constituency, constituency_payload, admin_headers) -> None:
    for name in ("Baner", "Camp", "Deccan"):
        client.post(
            "/api/v1/constituencies/admin/constituencies/add",
            json=constituency_payload(name),
            headers=admin_headers,
        )

    response = client.get("/api/v1/constituencies/list/paginated", params={"page": 2})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [c["area_name"] for c in data["constituencies"]] == ["Deccan", "Test Area"]
    assert data["pagination"] == {
        "currentPage": 2,
        "totalPages": 2,
        "totalItems": 4,
        "hasNextPage": False,
        "hasPrevPage": True,
        "limit": 2,
    }


def test_paginated_listing_rejects_bad_pages(client, constituency) -> None:
    assert client.get("/api/v1/constituencies/list/paginated", params={"page": 0}).status_code == 400
    assert client.get("/api/v1/constituencies/list/paginated", params={"page": 5}).status_code == 400
    assert client.get("/api/v1/constituencies/list/paginated", params={"limit": 11}).status_code == 400


def test_stats_overview(client, constituency) -> None:
    response = client.get("/api/v1/constituencies/stats/overview")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"total_constituencies": 1, "parties": ["BJP"], "total_departments": 2}


def test_vidhayak_poll_endpoint(client, constituency) -> None:
    response = client.post(
        "/api/v1/constituencies/poll/Test Area",
        json={"poll_category": "vidhayak", "question_id": 0, "poll_response": "yes"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Poll response recorded successfully"
    assert data["updated_scores"] == {"yes_votes": 1, "no_votes": 0, "score": 100}


def test_department_poll_endpoint(client, constituency) -> None:
    body = {"poll_category": "dept", "question_id": "0", "poll_response": 5, "dept_id": "health"}
    for _ in range(3):
        response = client.post("/api/v1/constituencies/poll/Test Area", json=body)
        assert response.status_code == status.HTTP_200_OK

    scores = response.json()["updated_scores"]
    assert scores["ratings"]["5"] == 3
    assert scores["question_score"] == 100
    assert scores["department_average_score"] == 100
    assert scores["manifesto_score"] == 100

    detail = client.get("/api/v1/constituencies/Test Area").json()
    assert detail["vidhayak_info"]["manifesto_score"] == 100


def test_poll_errors_map_to_status_codes(client, constituency) -> None:
    url = "/api/v1/constituencies/poll/Test Area"
    bad_category = client.post(url, json={"poll_category": "mla", "question_id": 0, "poll_response": "yes"})
    assert bad_category.status_code == status.HTTP_400_BAD_REQUEST
    assert bad_category.json()["error"] == "invalid_category"

    bad_rating = client.post(
        url, json={"poll_category": "dept", "question_id": 0, "poll_response": 6, "dept_id": "health"}
    )
    assert bad_rating.status_code == status.HTTP_400_BAD_REQUEST
    assert bad_rating.json()["error"] == "invalid_input"

    missing_area = client.post(
        "/api/v1/constituencies/poll/Atlantis",
        json={"poll_category": "vidhayak", "question_id": 0, "poll_response": "no"},
    )
    assert missing_area.status_code == status.HTTP_404_NOT_FOUND

    missing_field = client.post(url, json={"poll_category": "vidhayak"})
    assert missing_field.status_code == status.HTTP_400_BAD_REQUEST
    assert missing_field.json()["error"] == "invalid_input"


def test_admin_routes_require_token(client, constituency_payload) -> None:
    response = client.post("/api/v1/constituencies/admin/constituencies/add", json=constituency_payload("Baner"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_routes_reject_non_admin_token(client, constituency_payload) -> None:
    from charcha_manch.core.security import create_access_token

    headers = {"Authorization": f"Bearer {create_access_token('someone')}"}
    response = client.post(
        "/api/v1/constituencies/admin/constituencies/add",
        json=constituency_payload("Baner"),
        headers=headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_routes_open_when_auth_disabled(client, constituency_payload, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_auth_enabled", False)
    response = client.post("/api/v1/constituencies/admin/constituencies/add", json=constituency_payload("Baner"))
    assert response.status_code == status.HTTP_201_CREATED


def test_admin_add_generates_missing_department_ids(client, constituency_payload, admin_headers) -> None:
    payload = constituency_payload("Kothrud")
    for dept in payload["dept_info"]:
        dept.pop("id")

    response = client.post("/api/v1/constituencies/admin/constituencies/add", json=payload, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    summary = response.json()
    assert summary["dept_count"] == 2

    detail = client.get("/api/v1/constituencies/Kothrud").json()
    ids = [dept["id"] for dept in detail["dept_info"]]
    assert all(ids) and len(set(ids)) == 2


def test_admin_add_duplicate_area_conflicts(client, constituency, constituency_payload, admin_headers) -> None:
    response = client.post(
        "/api/v1/constituencies/admin/constituencies/add",
        json=constituency_payload("Test Area"),
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "conflict"


def test_admin_add_rejects_invalid_document(client, constituency_payload, admin_headers) -> None:
    payload = constituency_payload("Baner")
    payload["vidhayak_info"]["party_name"] = "Whigs"
    response = client.post("/api/v1/constituencies/admin/constituencies/add", json=payload, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_admin_update_replaces_content(client, constituency, constituency_payload, admin_headers) -> None:
    payload = constituency_payload("Test Area Renamed")
    payload["latest_news"].append({"title": "Metro line approved"})

    response = client.put(
        f"/api/v1/constituencies/admin/constituencies/update/{constituency.id}",
        json=payload,
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["latest_news_count"] == 2

    detail = client.get(f"/api/v1/constituencies/id/{constituency.id}").json()
    assert detail["area_name"] == "Test Area Renamed"
    assert [d["id"] for d in detail["dept_info"]] == ["health", "roads"]


def test_admin_update_area_name_conflict(client, constituency, constituency_payload, admin_headers) -> None:
    client.post("/api/v1/constituencies/admin/constituencies/add", json=constituency_payload("Baner"), headers=admin_headers)
    response = client.put(
        f"/api/v1/constituencies/admin/constituencies/update/{constituency.id}",
        json=constituency_payload("Baner"),
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_admin_delete(client, constituency, admin_headers) -> None:
    response = client.delete(
        f"/api/v1/constituencies/admin/constituencies/delete/{constituency.id}",
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/v1/constituencies/Test Area").status_code == status.HTTP_404_NOT_FOUND


def test_admin_delete_referenced_constituency_conflicts(client, test_post, constituency, admin_headers) -> None:
    response = client.delete(
        f"/api/v1/constituencies/admin/constituencies/delete/{constituency.id}",
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_admin_reset_populate(client, constituency, constituency_payload, admin_headers) -> None:
    response = client.post(
        "/api/v1/constituencies/admin/constituencies/reset-populate",
        json=[constituency_payload("Baner"), constituency_payload("Camp")],
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["deleted_constituencies"] == 1
    assert data["inserted_constituencies"] == 2

    names = [item["area_name"] for item in client.get("/api/v1/constituencies/").json()]
    assert names == ["Baner", "Camp"]
    dept_ids = [d["id"] for d in client.get("/api/v1/constituencies/Baner").json()["dept_info"]]
    assert "health" not in dept_ids


def test_admin_recompute(client, constituency, admin_headers) -> None:
    client.post(
        "/api/v1/constituencies/poll/Test Area",
        json={"poll_category": "dept", "question_id": 0, "poll_response": 5, "dept_id": "health"},
    )
    response = client.post(
        f"/api/v1/constituencies/admin/constituencies/{constituency.id}/recompute",
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["manifesto_score"] == 100
    assert data["changed"] is False


def test_admin_token_flow(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_password", "s3cret")

    rejected = client.post("/api/v1/auth/admin/token", json={"username": "admin", "password": "wrong"})
    assert rejected.status_code == status.HTTP_401_UNAUTHORIZED

    issued = client.post("/api/v1/auth/admin/token", json={"username": "admin", "password": "s3cret"})
    assert issued.status_code == status.HTTP_200_OK
    token = issued.json()["access_token"]

    response = client.post(
        "/api/v1/constituencies/admin/constituencies/999/recompute",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_admin_token_disabled_without_password(client) -> None:
    response = client.post("/api/v1/auth/admin/token", json={"username": "admin", "password": "anything"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_post_fixture_references_constituency(db_session, test_post, constituency) -> None:
    assert db_session.get(Post, test_post.id).constituency_id == constituency.id


def test_admin_update_racing_for_area_name_conflicts(
    client, monkeypatch, constituency, constituency_payload, admin_headers
) -> None:
    client.post("/api/v1/constituencies/admin/constituencies/add", json=constituency_payload("Baner"), headers=admin_headers)
    # Another request claims the name between the check and the write.
    monkeypatch.setattr(constituencies, "_ensure_area_name_free", lambda *args, **kwargs: None)

    response = client.put(
        f"/api/v1/constituencies/admin/constituencies/update/{constituency.id}",
        json=constituency_payload("Baner"),
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "conflict"
    assert client.get(f"/api/v1/constituencies/id/{constituency.id}").json()["area_name"] == "Test Area"


def test_admin_reset_populate_refused_while_posts_exist(client, test_post, constituency_payload, admin_headers) -> None:
    response = client.post(
        "/api/v1/constituencies/admin/constituencies/reset-populate",
        json=[constituency_payload("Baner")],
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert client.get("/api/v1/constituencies/Test Area").status_code == status.HTTP_200_OK
