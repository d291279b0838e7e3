# backend/tests/test_routes.py
from types import SimpleNamespace
from urllib.parse import quote

import pytest

from config import settings
from schemas.comment import CommentCreate
from storage.base import LikeTarget

ADMIN_ENDPOINTS = [
    ("post", "/api/projects"),
    ("patch", "/api/projects/some-id"),
    ("delete", "/api/projects/some-id"),
    ("post", "/api/achievements"),
    ("patch", "/api/achievements/some-id"),
    ("delete", "/api/achievements/some-id"),
    ("post", "/api/tools"),
    ("patch", "/api/tools/some-id"),
    ("delete", "/api/tools/some-id"),
    ("delete", "/api/comments/some-id"),
    ("get", "/api/admin/stats"),
]


# ---- admin gate ----
@pytest.mark.parametrize("method,url", ADMIN_ENDPOINTS)
def test_admin_endpoints_reject_anonymous(client, method, url):
    res = client.request(method.upper(), url)
    assert res.status_code == 401


@pytest.mark.parametrize("method,url", ADMIN_ENDPOINTS)
def test_admin_endpoints_reject_regular_users(client, user_headers, method, url):
    res = client.request(method.upper(), url, headers=user_headers)
    assert res.status_code == 403
    assert res.json()["detail"] == "Admin access required"


def test_admin_is_let_through(client, admin_headers):
    res = client.get("/api/admin/stats", headers=admin_headers)
    assert res.status_code == 200
    res = client.delete("/api/projects/some-id", headers=admin_headers)
    assert res.status_code == 404


# ---- projects ----
def test_create_project_multipart(client, admin_headers):
    res = client.post("/api/projects", headers=admin_headers, data={
        "title": "Portfolio",
        "description": "This site",
        "category": "Web App",
        "tags": '["React", "FastAPI"]',
        "isPublished": "true",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["tags"] == ["React", "FastAPI"]
    assert body["isPublished"] is True
    assert body["isFeatured"] is False
    assert body["likes"] == 0

    listed = client.get("/api/projects", params={"published": "true"}).json()
    assert [p["id"] for p in listed] == [body["id"]]


def test_create_project_rejects_invalid_data(client, admin_headers):
    res = client.post("/api/projects", headers=admin_headers, data={
        "title": "", "description": "d", "category": "Web",
    })
    assert res.status_code == 400

    res = client.post("/api/projects", headers=admin_headers, data={
        "title": "T", "description": "d", "category": "Web", "tags": "not json",
    })
    assert res.status_code == 400


def test_project_image_upload(client, admin_headers):
    res = client.post(
        "/api/projects",
        headers=admin_headers,
        data={"title": "Shot", "description": "d", "category": "Design"},
        files={"image": ("shot.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
    )
    assert res.status_code == 200
    assert res.json()["imageUrl"].startswith("/uploads/")
    assert res.json()["imageUrl"].endswith(".png")


def test_project_upload_rejects_other_files(client, admin_headers):
    res = client.post(
        "/api/projects",
        headers=admin_headers,
        data={"title": "Doc", "description": "d", "category": "Docs"},
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert res.status_code == 400


def test_update_and_delete_project(client, admin_headers, project):
    res = client.patch(f"/api/projects/{project.id}", headers=admin_headers, data={"isFeatured": "true"})
    assert res.status_code == 200
    assert res.json()["isFeatured"] is True
    assert res.json()["title"] == project.title

    res = client.delete(f"/api/projects/{project.id}", headers=admin_headers)
    assert res.json() == {"message": "Project deleted successfully"}
    assert client.get(f"/api/projects/{project.id}").status_code == 404


def test_update_cannot_touch_like_counter(client, admin_headers, project, storage):
    client.patch(f"/api/projects/{project.id}", headers=admin_headers, data={"likes": "99"})
    assert storage.get_project(project.id).likes == 0


# ---- achievements and tools ----
def test_achievement_crud(client, admin_headers):
    res = client.post("/api/achievements", headers=admin_headers, json={
        "title": "Speaker", "description": "Keynote", "icon": "users", "date": "2023-09-10T00:00:00Z",
    })
    assert res.status_code == 200
    achievement_id = res.json()["id"]

    res = client.patch(f"/api/achievements/{achievement_id}", headers=admin_headers, json={"isFeatured": True})
    assert res.json()["isFeatured"] is True
    assert client.get("/api/achievements", params={"featured": "true"}).json()[0]["id"] == achievement_id

    res = client.delete(f"/api/achievements/{achievement_id}", headers=admin_headers)
    assert res.status_code == 200
    assert client.get(f"/api/achievements/{achievement_id}").status_code == 404


def test_tools_listing_is_ordered(client, admin_headers):
    for name, order in (("Figma", "3"), ("React", "1"), ("Python", "2")):
        res = client.post("/api/tools", headers=admin_headers, data={"name": name, "order": order})
        assert res.status_code == 200
    assert [t["name"] for t in client.get("/api/tools").json()] == ["React", "Python", "Figma"]


# ---- likes ----
def test_toggle_like_requires_login(client, project):
    res = client.post("/api/likes/toggle", json={"projectId": project.id})
    assert res.status_code == 401


def test_toggle_like_round_trip(client, user_headers, project):
    res = client.post("/api/likes/toggle", headers=user_headers, json={"projectId": project.id})
    assert res.json() == {"liked": True, "count": 1}
    assert client.get(f"/api/projects/{project.id}").json()["likes"] == 1

    likes = client.get("/api/likes/user", headers=user_headers).json()
    assert [like["projectId"] for like in likes] == [project.id]

    res = client.post("/api/likes/toggle", headers=user_headers, json={"projectId": project.id})
    assert res.json() == {"liked": False, "count": 0}


def test_toggle_like_on_achievement(client, user_headers, achievement):
    res = client.post("/api/likes/toggle", headers=user_headers, json={
        "projectId": "", "achievementId": achievement.id,
    })
    assert res.status_code == 200
    assert res.json()["liked"] is True


@pytest.mark.parametrize("body", [{}, {"projectId": "", "achievementId": None}])
def test_toggle_like_without_target(client, user_headers, body):
    res = client.post("/api/likes/toggle", headers=user_headers, json=body)
    assert res.status_code == 400


def test_toggle_like_with_two_targets(client, user_headers, project, achievement):
    res = client.post("/api/likes/toggle", headers=user_headers, json={
        "projectId": project.id, "achievementId": achievement.id,
    })
    assert res.status_code == 400


def test_toggle_like_unknown_target(client, user_headers):
    res = client.post("/api/likes/toggle", headers=user_headers, json={"projectId": "missing"})
    assert res.status_code == 404


# ---- comments ----
def test_comment_is_created_and_broadcast(client, user_headers, project, notifier):
    res = client.post("/api/comments", headers=user_headers, json={"content": "Great work", "projectId": project.id})
    assert res.status_code == 200
    comment = res.json()
    assert comment["projectId"] == project.id

    assert len(notifier.events) == 1
    event_type, data = notifier.events[0]
    assert event_type == "new_comment"
    assert data["projectId"] == project.id
    assert data["achievementId"] is None
    assert data["comment"]["id"] == comment["id"]

    listed = client.get("/api/comments", params={"projectId": project.id}).json()
    assert listed[0]["content"] == "Great work"
    assert listed[0]["user"]["name"] == "Visitor"
    assert "email" not in listed[0]["user"]


def test_comment_errors(client, user_headers, achievement, notifier):
    assert client.post("/api/comments", json={"content": "hi", "achievementId": achievement.id}).status_code == 401
    assert client.post("/api/comments", headers=user_headers, json={"content": "hi"}).status_code == 400
    res = client.post("/api/comments", headers=user_headers, json={"content": "hi", "achievementId": "missing"})
    assert res.status_code == 404
    assert notifier.events == []


def test_admin_deletes_comment(client, storage, user, admin_headers, achievement):
    comment = storage.create_comment(user.id, CommentCreate(content="Congrats", achievement_id=achievement.id))

    res = client.delete(f"/api/comments/{comment.id}", headers=admin_headers)
    assert res.status_code == 200
    assert client.get("/api/comments", params={"achievementId": achievement.id}).json() == []
    assert client.delete(f"/api/comments/{comment.id}", headers=admin_headers).status_code == 404


# ---- stats, profile, share ----
def test_admin_stats(client, storage, user, admin_headers, project, achievement):
    storage.toggle_like(user.id, LikeTarget.from_refs(project_id=project.id))
    storage.toggle_like(user.id, LikeTarget.from_refs(achievement_id=achievement.id))
    storage.create_comment(user.id, CommentCreate(content="Nice", project_id=project.id))

    stats = client.get("/api/admin/stats", headers=admin_headers).json()
    assert stats["totalProjects"] == 1
    assert stats["publishedProjects"] == 1
    assert stats["draftProjects"] == 0
    assert stats["totalAchievements"] == 1
    assert stats["totalLikes"] == 2
    assert stats["totalComments"] == 1
    assert stats["recentComments"][0]["user"]["name"] == "Visitor"
    assert stats["popularProjects"][0]["id"] == project.id


def test_public_profile_is_the_admin(client, admin):
    res = client.get("/api/profile")
    assert res.status_code == 200
    assert res.json()["name"] == admin.name
    assert "email" not in res.json()


def test_update_about(client, user_headers):
    res = client.patch("/api/user/about", headers=user_headers, json={
        "aboutText": "I build things", "skills": ["Python"],
    })
    assert res.status_code == 200
    assert res.json()["user"]["aboutText"] == "I build things"
    assert res.json()["user"]["skills"] == ["Python"]


def test_update_profile_name(client, user_headers):
    res = client.patch("/api/user/profile", headers=user_headers, data={"name": "Renamed"})
    assert res.status_code == 200
    assert res.json()["user"]["name"] == "Renamed"


def test_share_on_linkedin(client, user_headers, project):
    res = client.post("/api/share/linkedin", headers=user_headers, json={"projectId": project.id})
    assert res.status_code == 200
    share_url = res.json()["shareUrl"]
    assert share_url.startswith("https://www.linkedin.com/sharing/share-offsite/?url=")
    page = f"{settings.FRONTEND_URL}/projects/{project.id}"
    assert share_url.endswith(quote(page, safe=""))

    res = client.post("/api/share/linkedin", headers=user_headers, json={"achievementId": "missing"})
    assert res.status_code == 404


def test_token_for_missing_user_gets_404(client, headers_for, project):
    ghost = SimpleNamespace(id="ghost", email="ghost@portfolio.dev", is_admin=False)
    headers = headers_for(ghost)

    res = client.post("/api/likes/toggle", headers=headers, json={"projectId": project.id})
    assert res.status_code == 404
    assert res.json()["detail"] == "User not found"

    res = client.post("/api/comments", headers=headers, json={"content": "Boo", "projectId": project.id})
    assert res.status_code == 404
    assert client.get(f"/api/projects/{project.id}").json()["likes"] == 0


def test_timestamps_are_utc_on_the_wire(client, project, achievement):
    body = client.get(f"/api/projects/{project.id}").json()
    achievement_body = client.get(f"/api/achievements/{achievement.id}").json()
    for value in (body["createdAt"], body["updatedAt"], achievement_body["createdAt"], achievement_body["date"]):
        assert value.endswith(("Z", "+00:00"))
