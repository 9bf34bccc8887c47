# tests/test_files.py

from models.enums import Role


FILE_T1 = {
    "id": "f1",
    "name": "budget.pdf",
    "url": "https://storage.example.com/budget.pdf",
    "type": "PDF",
    "team_id": "T1",
    "uploaded_by": "U8",
}


def test_volunteer_without_team_gets_no_team_state(client, login_as, make_user, fake_supabase):
    fake = fake_supabase({"files": [FILE_T1]})
    login_as(make_user(Role.volunteer, team_id=None))

    response = client.get("/files")

    assert response.status_code == 200
    body = response.json()
    assert body["no_team_assigned"] is True
    assert body["data"] == []
    assert "not currently assigned to a team" in body["message"]
    assert fake.queries == []


def test_volunteer_with_team_and_no_files(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"files": []})
    login_as(volunteer_user)

    response = client.get("/files")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": [], "no_team_assigned": False}
    query = fake.queries_for("files")[0]
    assert query.called("eq") == [("team_id", "T1")]
    assert query.calls[-1] == ("order", ("upload_date",), {"desc": True})


def test_semi_core_sees_all_files(client, login_as, semi_core_user, fake_supabase):
    fake = fake_supabase({"files": [FILE_T1]})
    login_as(semi_core_user)

    response = client.get("/files")

    assert response.status_code == 200
    assert len(response.json()["data"]) == 1
    assert fake.queries_for("files")[0].called("eq") == []


def test_listed_files_are_normalized(client, login_as, semi_core_user, fake_supabase):
    fake_supabase({"files": [{**FILE_T1, "id": 7, "type": "Spreadsheet"}]})
    login_as(semi_core_user)

    response = client.get("/files")

    listed = response.json()["data"][0]
    assert listed["id"] == "7"
    assert listed["type"] == "Other"
    assert listed["upload_date"] is None


def test_upload_to_own_team(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"files": [FILE_T1]})
    login_as(volunteer_user)

    response = client.post("/files", json={
        "name": "notes.docx",
        "url": "https://storage.example.com/notes.docx",
        "type": "Doc",
        "team_id": "T1",
    })

    assert response.status_code == 200
    inserted = fake.writes("files", "insert")[0]
    assert inserted["uploaded_by"] == "U8"
    assert inserted["type"] == "Doc"


def test_upload_to_other_team_forbidden(client, login_as, head_user, fake_supabase):
    fake = fake_supabase()
    login_as(head_user)

    response = client.post("/files", json={
        "name": "notes.docx",
        "url": "https://storage.example.com/notes.docx",
        "team_id": "T2",
    })

    assert response.status_code == 403
    assert fake.queries == []


def test_uploader_renames_file(client, login_as, volunteer_user, fake_supabase):
    fake = fake_supabase({"files": [FILE_T1]})
    login_as(volunteer_user)

    response = client.patch("/files/f1", json={"name": "  budget-2026.pdf "})

    assert response.status_code == 200
    assert fake.writes("files", "update")[0] == {"name": "budget-2026.pdf"}


def test_head_cannot_rename_teammates_file(client, login_as, head_user, fake_supabase):
    fake_supabase({"files": [FILE_T1]})
    login_as(head_user)

    response = client.patch("/files/f1", json={"name": "mine.pdf"})

    assert response.status_code == 403
    assert response.json()["detail"] == "You can only modify files you uploaded."


def test_rename_to_blank_rejected(client, login_as, volunteer_user, fake_supabase):
    fake_supabase({"files": [FILE_T1]})
    login_as(volunteer_user)

    response = client.patch("/files/f1", json={"name": "   "})

    assert response.status_code == 422


def test_semi_core_deletes_any_file(client, login_as, semi_core_user, fake_supabase):
    fake = fake_supabase({"files": [FILE_T1]})
    login_as(semi_core_user)

    response = client.delete("/files/f1")

    assert response.status_code == 200
    assert fake.queries_for("files")[-1].called("delete") == [()]


def test_delete_missing_file(client, login_as, core_user, fake_supabase):
    fake_supabase({"files": []})
    login_as(core_user)

    response = client.delete("/files/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "File not found"
