"""Goal endpoint tests."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from factories import auth_headers, in_days, make_goal, make_suggestion, new_user_id
from orelse.core.security import create_access_token
from orelse.models.goal import Goal, GoalStatus
from orelse.models.user import User


@pytest.mark.asyncio
async def test_create_goal(client: AsyncClient, author: User):
    deadline = in_days(10).isoformat()
    response = await client.post(
        "/api/goal",
        json={"description": "Read twelve books", "deadline": deadline, "isPublic": False},
        headers=auth_headers(author),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["description"] == "Read twelve books"
    assert data["isPublic"] is False
    assert data["authorId"] == str(author.id)
    assert data["status"] == "ACTIVE"
    assert data["effectiveStatus"] == "ACTIVE"


@pytest.mark.asyncio
async def test_create_goal_defaults_to_public(client: AsyncClient, author: User):
    response = await client.post(
        "/api/goal",
        json={"description": "Learn to juggle", "deadline": in_days(3).isoformat()},
        headers=auth_headers(author),
    )
    assert response.status_code == 201
    assert response.json()["isPublic"] is True


@pytest.mark.asyncio
async def test_create_goal_registers_new_user(client: AsyncClient, db_session: AsyncSession):
    """A first-time caller gets a user row from the token's profile."""
    newcomer = User(id=new_user_id(), email="new@test.com", name="Newcomer")
    response = await client.post(
        "/api/goal",
        json={"description": "Wake up at six", "deadline": in_days(1).isoformat()},
        headers=auth_headers(newcomer),
    )
    assert response.status_code == 201

    me = await client.get("/api/users/me", headers=auth_headers(newcomer))
    assert me.status_code == 200
    assert me.json()["email"] == "new@test.com"


@pytest.mark.asyncio
async def test_create_goal_with_cuid_subject(client: AsyncClient):
    """Provider ids are opaque strings, not UUIDs."""
    token = create_access_token(subject="clx2k9f0w0000qz8h1a2b3c4d", email="cuid@test.com")
    response = await client.post(
        "/api/goal",
        json={"description": "Ship the side project", "deadline": in_days(5).isoformat()},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 201
    assert response.json()["authorId"] == "clx2k9f0w0000qz8h1a2b3c4d"


@pytest.mark.asyncio
async def test_create_goal_no_auth(client: AsyncClient):
    response = await client.post(
        "/api/goal",
        json={"description": "Anything", "deadline": in_days(1).isoformat()},
    )
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_create_goal_invalid_token(client: AsyncClient):
    response = await client.post(
        "/api/goal",
        json={"description": "Anything", "deadline": in_days(1).isoformat()},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_goal_validation(client: AsyncClient, author: User):
    headers = auth_headers(author)

    # Empty description
    response = await client.post(
        "/api/goal",
        json={"description": "   ", "deadline": in_days(1).isoformat()},
        headers=headers,
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input."
    assert body["issues"][0]["path"] == ["description"]

    # Deadline without an offset
    response = await client.post(
        "/api/goal",
        json={"description": "Swim", "deadline": "2030-01-01T10:00:00"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["issues"][0]["path"] == ["deadline"]

    # Too long
    response = await client.post(
        "/api/goal",
        json={"description": "x" * 1001, "deadline": in_days(1).isoformat()},
        headers=headers,
    )
    assert response.status_code == 400

    # Length counts the text as sent, surrounding spaces included
    response = await client.post(
        "/api/goal",
        json={"description": "x" * 1000 + " ", "deadline": in_days(1).isoformat()},
        headers=headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_auth_checked_before_payload(client: AsyncClient):
    response = await client.post("/api/goal", json={"description": ""})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_goal_past_deadline_reads_as_failed(
    client: AsyncClient, db_session: AsyncSession, author: User, friend: User
):
    """Deadline one second ago: FAILED on read, the 5-vote suggestion is chosen."""
    goal = await make_goal(db_session, author, deadline=datetime.now(timezone.utc) - timedelta(seconds=1))
    t1 = datetime.now(timezone.utc) - timedelta(hours=2)
    await make_suggestion(db_session, goal, friend, text="Three votes", vote_count=3, created_at=t1)
    await make_suggestion(
        db_session, goal, friend, text="Five votes", vote_count=5, created_at=t1 + timedelta(minutes=5)
    )

    response = await client.get(f"/api/goal/{goal.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ACTIVE"
    assert data["effectiveStatus"] == "FAILED"
    assert data["consequenceState"] == "chosen"
    assert data["chosenSuggestion"]["suggestion"] == "Five votes"
    assert [s["voteCount"] for s in data["suggestions"]] == [5, 3]
    assert data["canSuggest"] is False


@pytest.mark.asyncio
async def test_failed_goal_without_suggestions(client: AsyncClient, db_session: AsyncSession, author: User):
    goal = await make_goal(db_session, author, deadline=in_days(-2))

    data = (await client.get(f"/api/goal/{goal.id}")).json()
    assert data["effectiveStatus"] == "FAILED"
    assert data["consequenceState"] == "none_suggested"
    assert data["chosenSuggestion"] is None


@pytest.mark.asyncio
async def test_completed_goal_stays_completed(client: AsyncClient, db_session: AsyncSession, author: User):
    goal = await make_goal(db_session, author, deadline=in_days(-5), status=GoalStatus.COMPLETED)

    data = (await client.get(f"/api/goal/{goal.id}")).json()
    assert data["effectiveStatus"] == "COMPLETED"
    assert data["consequenceState"] == "pending"


@pytest.mark.asyncio
async def test_goal_detail_permission_hints(
    client: AsyncClient, active_goal: Goal, author: User, friend: User
):
    as_author = (await client.get(f"/api/goal/{active_goal.id}", headers=auth_headers(author))).json()
    assert as_author["isAuthor"] is True
    assert as_author["canMarkComplete"] is True
    assert as_author["canSuggest"] is False

    as_friend = (await client.get(f"/api/goal/{active_goal.id}", headers=auth_headers(friend))).json()
    assert as_friend["isAuthor"] is False
    assert as_friend["canSuggest"] is True

    anonymous = (await client.get(f"/api/goal/{active_goal.id}")).json()
    assert anonymous["canSuggest"] is False


@pytest.mark.asyncio
async def test_private_goal_visible_to_author_only(
    client: AsyncClient, db_session: AsyncSession, author: User, friend: User
):
    goal = await make_goal(db_session, author, is_public=False)

    assert (await client.get(f"/api/goal/{goal.id}")).status_code == 404
    assert (await client.get(f"/api/goal/{goal.id}", headers=auth_headers(friend))).status_code == 404
    assert (await client.get(f"/api/goal/{goal.id}", headers=auth_headers(author))).status_code == 200


@pytest.mark.asyncio
async def test_goal_detail_unknown_id(client: AsyncClient):
    response = await client.get(f"/api/goal/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"] == "Goal not found."


@pytest.mark.asyncio
async def test_public_feed(client: AsyncClient, db_session: AsyncSession, author: User):
    soon = await make_goal(db_session, author, deadline=in_days(1), description="Soon")
    later = await make_goal(db_session, author, deadline=in_days(30), description="Later")
    await make_goal(db_session, author, is_public=False, description="Secret")

    response = await client.get("/api/goal")
    assert response.status_code == 200
    ids = [g["id"] for g in response.json()]
    assert ids == [str(later.id), str(soon.id)]
    assert response.json()[0]["author"]["name"] == "Goal Author"


@pytest.mark.asyncio
async def test_public_feed_limit(client: AsyncClient, db_session: AsyncSession, author: User):
    for i in range(3):
        await make_goal(db_session, author, deadline=in_days(i + 1))

    response = await client.get("/api/goal", params={"limit": 2})
    assert len(response.json()) == 2

    assert (await client.get("/api/goal", params={"limit": 0})).status_code == 400


@pytest.mark.asyncio
async def test_my_goals(client: AsyncClient, db_session: AsyncSession, author: User, friend: User):
    await make_goal(db_session, author, is_public=False, description="Private one")
    await make_goal(db_session, author, description="Public one")
    await make_goal(db_session, friend, description="Not mine")

    response = await client.get("/api/goal/mine", headers=auth_headers(author))
    assert response.status_code == 200
    descriptions = {g["description"] for g in response.json()}
    assert descriptions == {"Private one", "Public one"}


@pytest.mark.asyncio
async def test_my_goals_requires_auth(client: AsyncClient):
    assert (await client.get("/api/goal/mine")).status_code == 401


# ---- Mark complete ----


@pytest.mark.asyncio
async def test_mark_complete(client: AsyncClient, active_goal: Goal, author: User):
    response = await client.patch(
        f"/api/goal/{active_goal.id}",
        json={"status": "COMPLETED"},
        headers=auth_headers(author),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "COMPLETED"
    assert data["effectiveStatus"] == "COMPLETED"


@pytest.mark.asyncio
async def test_mark_complete_after_deadline_is_honoured(
    client: AsyncClient, db_session: AsyncSession, author: User
):
    """Stored status decides, so a late completion still goes through."""
    goal = await make_goal(db_session, author, deadline=in_days(-1))

    response = await client.patch(
        f"/api/goal/{goal.id}", json={"status": "COMPLETED"}, headers=auth_headers(author)
    )
    assert response.status_code == 200
    assert response.json()["effectiveStatus"] == "COMPLETED"


@pytest.mark.asyncio
async def test_mark_complete_no_auth(client: AsyncClient, active_goal: Goal):
    response = await client.patch(f"/api/goal/{active_goal.id}", json={"status": "COMPLETED"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_mark_complete_not_found(client: AsyncClient, author: User):
    response = await client.patch(
        f"/api/goal/{uuid.uuid4()}",
        json={"status": "COMPLETED"},
        headers=auth_headers(author),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_mark_complete_not_author(client: AsyncClient, active_goal: Goal, friend: User):
    response = await client.patch(
        f"/api/goal/{active_goal.id}", json={"status": "COMPLETED"}, headers=auth_headers(friend)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_mark_complete_not_author_beats_not_active(
    client: AsyncClient, db_session: AsyncSession, author: User, friend: User
):
    goal = await make_goal(db_session, author, status=GoalStatus.COMPLETED)
    response = await client.patch(
        f"/api/goal/{goal.id}", json={"status": "COMPLETED"}, headers=auth_headers(friend)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("stored", [GoalStatus.COMPLETED, GoalStatus.FAILED])
async def test_mark_complete_requires_active(
    client: AsyncClient, db_session: AsyncSession, author: User, stored: GoalStatus
):
    goal = await make_goal(db_session, author, status=stored)
    response = await client.patch(
        f"/api/goal/{goal.id}", json={"status": "COMPLETED"}, headers=auth_headers(author)
    )
    assert response.status_code == 400
    assert stored.value in response.json()["error"]


@pytest.mark.asyncio
async def test_mark_complete_twice(client: AsyncClient, active_goal: Goal, author: User):
    headers = auth_headers(author)
    first = await client.patch(f"/api/goal/{active_goal.id}", json={"status": "COMPLETED"}, headers=headers)
    second = await client.patch(f"/api/goal/{active_goal.id}", json={"status": "COMPLETED"}, headers=headers)
    assert first.status_code == 200
    assert second.status_code == 400


@pytest.mark.asyncio
async def test_mark_complete_rejects_other_statuses(client: AsyncClient, active_goal: Goal, author: User):
    response = await client.patch(
        f"/api/goal/{active_goal.id}", json={"status": "FAILED"}, headers=auth_headers(author)
    )
    assert response.status_code == 400
    assert response.json()["issues"][0]["path"] == ["status"]
