"""
Admin console API tests.

Tests:
1. Role gate
2. Catalog CRUD with payload cleaning
3. Moderation queue, approve / reject, conflicting actions
4. User management and self-protection
5. Interactions list and analytics
"""


def test_non_admin_is_forbidden(client, user):
    assert client.get("/api/admin/jobs", headers=user["headers"]).status_code == 403
    assert client.get("/api/admin/analytics").status_code == 401


def test_listing_crud(client, admin, mongo_db):
    created = client.post("/api/admin/internships", headers=admin["headers"], json={
        "title": "ML Intern", "company": "DeepCo", "salary": "", "location": None,
        "office_type": "remote", "skills": ["PyTorch"]
    })
    assert created.status_code == 201
    item = created.json()
    assert item["created_by"] == admin["user_id"]
    stored = mongo_db["internships"].find_one()
    assert "salary" not in stored and "location" not in stored

    updated = client.put(f"/api/admin/internships/{item['id']}", headers=admin["headers"],
                         json={"salary": "20k/month", "is_featured": True})
    assert updated.json()["salary"] == "20k/month"
    assert updated.json()["title"] == "ML Intern"

    page = client.get("/api/admin/internships", headers=admin["headers"]).json()
    assert page["total"] == 1

    deleted = client.delete(f"/api/admin/internships/{item['id']}", headers=admin["headers"])
    assert deleted.status_code == 200
    again = client.delete(f"/api/admin/internships/{item['id']}", headers=admin["headers"])
    assert again.status_code == 404


def test_update_cannot_null_required_fields(client, admin):
    job = client.post("/api/admin/jobs", headers=admin["headers"], json={"title": "Backend Engineer"}).json()

    for body in ({"title": None}, {"skills": None}, {"is_featured": None}):
        response = client.put(f"/api/admin/jobs/{job['id']}", headers=admin["headers"], json=body)
        assert response.status_code == 422

    listing = client.get("/api/jobs")
    assert listing.status_code == 200
    assert listing.json()["items"][0]["title"] == "Backend Engineer"

    # nullable fields can still be cleared
    cleared = client.put(f"/api/admin/jobs/{job['id']}", headers=admin["headers"], json={"salary": None})
    assert cleared.status_code == 200


def test_event_update_cannot_null_title(client, admin):
    event = client.post("/api/admin/events", headers=admin["headers"], json={
        "title": "Campus Drive", "start_date": "2031-01-05"
    }).json()

    for body in ({"title": None}, {"tags": None}):
        response = client.put(f"/api/admin/events/{event['id']}", headers=admin["headers"], json=body)
        assert response.status_code == 422

    listing = client.get("/api/events")
    assert listing.status_code == 200
    assert listing.json()["items"][0]["title"] == "Campus Drive"


def test_unknown_collection(client, admin):
    assert client.get("/api/admin/widgets", headers=admin["headers"]).status_code == 422


def test_admin_page_size_is_eight(client, admin):
    for i in range(10):
        client.post("/api/admin/courses", headers=admin["headers"], json={"title": f"Course {i}"})
    page = client.get("/api/admin/courses", headers=admin["headers"]).json()
    assert len(page["items"]) == 8
    assert page["total_pages"] == 2


def test_admin_created_event_is_published(client, admin):
    created = client.post("/api/admin/events", headers=admin["headers"], json={
        "title": "Campus Drive", "start_date": "2031-01-05", "tags": ["Placement"]
    })
    assert created.status_code == 201
    assert created.json()["status"] == "approved"
    assert client.get("/api/events").json()["total"] == 1

    renamed = client.put(f"/api/admin/events/{created.json()['id']}", headers=admin["headers"],
                         json={"title": "Campus Drive 2031"})
    assert renamed.json()["title"] == "Campus Drive 2031"

    deleted = client.delete(f"/api/admin/events/{created.json()['id']}", headers=admin["headers"])
    assert deleted.status_code == 200
    assert client.get("/api/events").json()["total"] == 0


def _submit(client, title):
    return client.post("/api/events/submissions", json={
        "organizer_name": "O", "organizer_phone": "1", "organizer_email": "o@example.com",
        "organizer_designation": "D", "title": title, "description": "d",
        "start_date": "2031-02-01", "register_by_date": "2031-01-20",
        "poster_link": "https://p.example.com", "registration_link": "https://r.example.com",
    }).json()


def test_moderation_queue(client, admin):
    first = _submit(client, "First")
    second = _submit(client, "Second")

    queue = client.get("/api/admin/moderation", headers=admin["headers"]).json()
    assert {e["title"] for e in queue["items"]} == {"First", "Second"}

    assert client.post(f"/api/admin/moderation/{first['id']}/approve",
                       headers=admin["headers"]).status_code == 200
    assert client.post(f"/api/admin/moderation/{second['id']}/reject",
                       headers=admin["headers"]).status_code == 200

    queue = client.get("/api/admin/moderation", headers=admin["headers"]).json()
    assert queue["total"] == 0

    # approved is terminal for moderation actions
    conflict = client.post(f"/api/admin/moderation/{first['id']}/reject", headers=admin["headers"])
    assert conflict.status_code == 409
    gone = client.post(f"/api/admin/moderation/{second['id']}/approve", headers=admin["headers"])
    assert gone.status_code == 404


def test_user_management(client, admin, user):
    users = client.get("/api/admin/users?search=student", headers=admin["headers"]).json()
    assert [u["email"] for u in users["users"]] == ["student@example.com"]

    promoted = client.put(f"/api/admin/users/{user['user_id']}/role", headers=admin["headers"],
                          json={"role": "admin"})
    assert promoted.json()["role"] == "admin"
    assert client.get("/api/admin/jobs", headers=user["headers"]).status_code == 200

    deleted = client.delete(f"/api/admin/users/{user['user_id']}", headers=admin["headers"])
    assert deleted.status_code == 200
    login = client.post("/api/auth/login", json={"email": "student@example.com", "password": "secret123"})
    assert login.status_code == 401


def test_admin_cannot_change_own_account(client, admin):
    own = admin["user_id"]
    assert client.put(f"/api/admin/users/{own}/role", headers=admin["headers"],
                      json={"role": "user"}).status_code == 400
    assert client.put(f"/api/admin/users/{own}/block", headers=admin["headers"],
                      json={"is_blocked": True}).status_code == 400
    assert client.delete(f"/api/admin/users/{own}", headers=admin["headers"]).status_code == 400


def test_interactions_and_analytics(client, admin, user):
    client.post("/api/interactions", json={"type": "course_waitlist"}, headers=user["headers"])
    _submit(client, "Pending")

    interactions = client.get("/api/admin/interactions?type=course_waitlist",
                              headers=admin["headers"]).json()
    assert interactions["total"] == 1
    assert interactions["items"][0]["user_email"] == "student@example.com"

    stats = client.get("/api/admin/analytics", headers=admin["headers"]).json()
    assert stats["totals"]["users"] == 2
    assert stats["totals"]["user_interactions"] == 1
    assert stats["pending_events"] == 1
    assert stats["interactions_by_type"] == {"course_waitlist": 1}
    assert stats["growth"][-1] == {"label": "Now", "users": 2}
