"""Tuition Routes — posting, visibility, owner edits, and admin moderation.

Invariants tested:
    - New postings are pending and owned by the caller, whatever the body says
    - Only students may post
    - Public listing and strangers see approved postings only
    - Hidden postings read as 404 to strangers
    - Moderation: admin only, pending -> approved/rejected, unknown status 400,
      illegal transition 409
"""

from uuid import UUID

from etuition.models.tuition import Tuition

SUPER = "admin@etuition.com"


# ─── Posting ────────────────────────────────────────────────────

async def test_student_posts_pending_tuition(client, make_user, auth_headers, load):
    await make_user("s@x.com")
    resp = await client.post(
        "/tuitions",
        json={
            "subject": "Math", "class": "8", "salary": 4000,
            "location": "Dhaka", "studentEmail": "victim@x.com",
        },
        headers=auth_headers("s@x.com"),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["studentEmail"] == "s@x.com"
    assert body["class"] == "8"
    stored = await load(Tuition, UUID(body["id"]))
    assert stored.student_email == "s@x.com"


async def test_tutor_cannot_post(client, make_user, auth_headers):
    await make_user("t@x.com", role="tutor")
    resp = await client.post(
        "/tuitions", json={"subject": "Math"}, headers=auth_headers("t@x.com"),
    )
    assert resp.status_code == 403


async def test_post_requires_token(client):
    resp = await client.post("/tuitions", json={"subject": "Math"})
    assert resp.status_code == 401


async def test_post_blank_subject_is_400(client, auth_headers):
    resp = await client.post(
        "/tuitions", json={"subject": "  "}, headers=auth_headers("s@x.com"),
    )
    assert resp.status_code == 400


# ─── Visibility ─────────────────────────────────────────────────

async def test_public_listing_shows_approved_only(client, make_tuition):
    await make_tuition("s@x.com", status="approved", subject="Math")
    await make_tuition("s@x.com", status="pending", subject="Physics")
    await make_tuition("s@x.com", status="rejected", subject="Art")

    resp = await client.get("/tuitions")
    assert [t["subject"] for t in resp.json()] == ["Math"]


async def test_owner_listing_includes_hidden(client, make_tuition, auth_headers):
    await make_tuition("s@x.com", status="approved", subject="Math")
    await make_tuition("s@x.com", status="pending", subject="Physics")
    await make_tuition("other@x.com", status="approved", subject="Art")

    resp = await client.get(
        "/tuitions", params={"studentEmail": "s@x.com"},
        headers=auth_headers("s@x.com"),
    )
    assert sorted(t["subject"] for t in resp.json()) == ["Math", "Physics"]


async def test_stranger_listing_by_email_shows_approved_only(
    client, make_tuition, auth_headers,
):
    await make_tuition("s@x.com", status="approved", subject="Math")
    await make_tuition("s@x.com", status="pending", subject="Physics")

    resp = await client.get(
        "/tuitions", params={"studentEmail": "s@x.com"},
        headers=auth_headers("e@x.com"),
    )
    assert [t["subject"] for t in resp.json()] == ["Math"]


async def test_hidden_tuition_is_404_for_strangers(client, make_tuition, auth_headers):
    tuition = await make_tuition("s@x.com", status="pending")
    assert (await client.get(f"/tuition/{tuition.id}")).status_code == 404
    assert (await client.get(
        f"/tuition/{tuition.id}", headers=auth_headers("s@x.com"),
    )).status_code == 200
    assert (await client.get(
        f"/tuition/{tuition.id}", headers=auth_headers(SUPER),
    )).status_code == 200


async def test_malformed_id_is_400(client):
    resp = await client.get("/tuition/not-a-uuid")
    assert resp.status_code == 400


# ─── Moderation ─────────────────────────────────────────────────

async def test_admin_approves_pending(client, make_tuition, auth_headers):
    tuition = await make_tuition("s@x.com", status="pending")
    resp = await client.patch(
        f"/tuitions/status/{tuition.id}", json={"status": "approved"},
        headers=auth_headers(SUPER),
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "approved"

    resp = await client.patch(
        f"/tuitions/status/{tuition.id}", json={"status": "rejected"},
        headers=auth_headers(SUPER),
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "INVALID_TRANSITION"


async def test_unknown_status_is_400(client, make_tuition, auth_headers):
    tuition = await make_tuition("s@x.com", status="pending")
    resp = await client.patch(
        f"/tuitions/status/{tuition.id}", json={"status": "published"},
        headers=auth_headers(SUPER),
    )
    assert resp.status_code == 400


async def test_owner_cannot_moderate(client, make_tuition, auth_headers, load):
    tuition = await make_tuition("s@x.com", status="pending")
    resp = await client.patch(
        f"/tuitions/status/{tuition.id}", json={"status": "approved"},
        headers=auth_headers("s@x.com"),
    )
    assert resp.status_code == 403
    assert (await load(Tuition, tuition.id)).status == "pending"


async def test_moderation_queue_filters_by_status(client, make_tuition, auth_headers):
    await make_tuition("s@x.com", status="pending", subject="Physics")
    await make_tuition("s@x.com", status="approved", subject="Math")

    resp = await client.get(
        "/admin/tuitions", params={"status": "pending"}, headers=auth_headers(SUPER),
    )
    assert [t["subject"] for t in resp.json()] == ["Physics"]

    resp = await client.get("/admin/tuitions", headers=auth_headers("s@x.com"))
    assert resp.status_code == 403


# ─── Owner edits ────────────────────────────────────────────────

async def test_owner_edits_tuition(client, make_tuition, auth_headers):
    tuition = await make_tuition("s@x.com")
    resp = await client.patch(
        f"/tuitions/{tuition.id}", json={"salary": 6000},
        headers=auth_headers("s@x.com"),
    )
    assert resp.status_code == 200
    assert resp.json()["salary"] == 6000.0


async def test_stranger_cannot_edit_or_delete(client, make_tuition, auth_headers):
    tuition = await make_tuition("s@x.com")
    headers = auth_headers("e@x.com")
    assert (await client.patch(
        f"/tuitions/{tuition.id}", json={"salary": 1}, headers=headers,
    )).status_code == 403
    assert (await client.delete(
        f"/tuitions/{tuition.id}", headers=headers,
    )).status_code == 403


async def test_owner_deletes_tuition(client, make_tuition, auth_headers, load):
    tuition = await make_tuition("s@x.com")
    resp = await client.delete(
        f"/tuitions/{tuition.id}", headers=auth_headers("s@x.com"),
    )
    assert resp.json() == {"deletedCount": 1}
    assert await load(Tuition, tuition.id) is None
