# tests/test_chat_meetings.py

"""
Team chat rooms and meetings.
"""

from models.enums import Role


MESSAGES = [
    {"id": "m2", "team_id": "T1", "sender_id": "U2", "sender_name": "Two", "text": "second"},
    {"id": "m1", "team_id": "T1", "sender_id": "U1", "sender_name": "One", "text": "first"},
]


# -----------------------------------------------------
# CHAT
# -----------------------------------------------------
def test_chat_teams_for_volunteer(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"teams": [{"id": "T1", "name": "Alpha"}]})
    login_as(volunteer_user)

    response = client.get("/chat/teams")

    assert response.status_code == 200
    assert fake.queries_for("teams")[0].called("eq") == [("id", "T1")]
    assert [room["id"] for room in response.json()["data"]] == ["common", "T1"]


def test_teamless_volunteer_still_gets_community_room(client, login_as, make_user, fake_supabase):
    fake = fake_supabase({"teams": [{"id": "T1", "name": "Alpha"}]})
    login_as(make_user(Role.volunteer, team_id=None, uid="U5"))

    response = client.get("/chat/teams")

    assert response.status_code == 200
    body = response.json()
    assert body["no_team_assigned"] is True
    assert body["data"] == [{"id": "common", "name": "Community", "is_common": True}]
    assert fake.queries == []


def test_teamless_volunteer_posts_to_community(client, login_as, make_user, fake_supabase):
    fake = fake_supabase({"messages": []})
    login_as(make_user(Role.volunteer, team_id=None, uid="U5"))

    response = client.post("/chat/common/messages", json={"text": "hello everyone"})

    assert response.status_code == 200
    inserted = fake.writes("messages", "insert")[0]
    assert inserted["team_id"] == "common"
    assert inserted["sender_id"] == "U5"


def test_volunteer_cannot_read_other_team_chat(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"messages": MESSAGES})
    login_as(volunteer_user)

    response = client.get("/chat/T2/messages")

    assert response.status_code == 403
    assert fake.queries == []


def test_messages_returned_oldest_first(client, login_as, volunteer_user, fake_supabase):
    fake_supabase({"messages": MESSAGES})
    login_as(volunteer_user)

    response = client.get("/chat/T1/messages")

    assert response.status_code == 200
    assert [m["id"] for m in response.json()["data"]] == ["m1", "m2"]


def test_send_message(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"messages": []})
    login_as(volunteer_user)

    response = client.post("/chat/T1/messages", json={"text": "  hello team  "})

    assert response.status_code == 200
    inserted = fake.writes("messages", "insert")[0]
    assert inserted["text"] == "hello team"
    assert inserted["sender_id"] == "U8"
    assert inserted["sender_name"] == "Test User"


def test_semi_core_chats_in_any_team(client, login_as, semi_core_user, fake_supabase):
    fake_supabase({"messages": []})
    login_as(semi_core_user)

    response = client.post("/chat/T9/messages", json={"text": "hi"})

    assert response.status_code == 200


# -----------------------------------------------------
# MEETINGS
# -----------------------------------------------------
def test_team_member_sees_team_and_all_team_meetings(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"meetings": []})
    login_as(volunteer_user)

    response = client.get("/meetings")

    assert response.status_code == 200
    assert fake.queries_for("meetings")[0].called("or_") == [("team_id.eq.T1,team_id.is.null",)]


def test_meetings_without_team(client, login_as, make_user, fake_supabase):
    fake_supabase()
    login_as(make_user(Role.head, team_id=None))

    response = client.get("/meetings")

    assert response.json()["no_team_assigned"] is True


def test_volunteer_cannot_schedule_meeting(client, login_as, volunteer_user, fake_supabase):
    fake_supabase()
    login_as(volunteer_user)

    response = client.post("/meetings", json={
        "title": "Sync",
        "meeting_link": "https://meet.example.com/sync",
        "scheduled_date": "2026-11-01T18:00:00Z",
    })

    assert response.status_code == 403


def test_schedule_meeting_for_all_teams(client, login_as, semi_core_user, fake_supabase):
    fake = fake_supabase({"meetings": [{"id": "mt1"}]})
    login_as(semi_core_user)

    response = client.post("/meetings", json={
        "title": "All hands",
        "meeting_link": "https://meet.example.com/all",
        "scheduled_date": "2026-11-01T18:00:00Z",
        "team_id": "all",
    })

    assert response.status_code == 200
    inserted = fake.writes("meetings", "insert")[0]
    assert inserted["team_id"] is None
    assert inserted["created_by"] == "SEMI1"
