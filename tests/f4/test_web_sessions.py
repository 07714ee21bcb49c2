"""Tests for mentors, session booking and feedback."""

import pytest

from skillup.config.mentors import (
    get_default_mentor,
    get_mentor,
    list_mentors,
    load_mentors,
)
from skillup.db.bookings_repository import list_feedback
from skillup.utils.validators import InvalidSlotError, validate_session_slot


class TestMentorsConfig:
    """Tests for the mentor catalogue."""

    def test_list_mentors(self):
        names = [m.name for m in list_mentors()]
        assert names == ["Dr. Sarah", "Prof. James", "Ms. Emily"]

    def test_default_mentor(self):
        assert get_default_mentor().name == "Dr. Sarah"

    def test_get_mentor(self):
        assert get_mentor("Prof. James").role == "Aptitude Expert"
        assert get_mentor("Nobody") is None

    def test_missing_file_uses_builtin(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mentors = load_mentors(force_reload=True)
        assert "Dr. Sarah" in mentors

    def test_invalid_yaml_uses_builtin(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "data" / "config"
        config_dir.mkdir(parents=True)
        (config_dir / "mentors_v1.yaml").write_text("mentors:\n  - role: no name\n")
        monkeypatch.chdir(tmp_path)

        mentors = load_mentors(force_reload=True)
        assert "Dr. Sarah" in mentors


class TestSlotValidation:
    """Tests for validate_session_slot."""

    def test_valid_slot(self):
        validate_session_slot("2026-03-10", "14:30")

    @pytest.mark.parametrize(
        "date,time",
        [("10/03/2026", "14:30"), ("2026-03-10", "2pm"), ("", "14:30")],
    )
    def test_invalid_slot(self, date, time):
        with pytest.raises(InvalidSlotError):
            validate_session_slot(date, time)


class TestSessionEndpoints:
    """Tests for /api/mentors and /api/sessions."""

    def test_get_mentors(self, client):
        response = client.get("/api/mentors")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["mentors"][0]["name"] == "Dr. Sarah"
        assert data["mentors"][0]["default"] is True

    def test_book_session(self, client, auth_headers):
        response = client.post(
            "/api/sessions",
            json={"mentor_name": "Dr. Sarah", "date": "2026-03-10", "time": "14:30"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

        sessions = client.get("/api/sessions", headers=auth_headers).json()
        assert len(sessions) == 1
        assert sessions[0]["mentor_name"] == "Dr. Sarah"
        assert sessions[0]["time"] == "14:30"

    def test_overlapping_bookings_allowed(self, client, auth_headers):
        slot = {"mentor_name": "Dr. Sarah", "date": "2026-03-10", "time": "14:30"}
        for _ in range(2):
            response = client.post("/api/sessions", json=slot, headers=auth_headers)
            assert response.status_code == 200

        assert len(client.get("/api/sessions", headers=auth_headers).json()) == 2

    def test_sessions_are_per_user(self, client, signup):
        first = signup(email="first@example.com")
        second = signup(email="second@example.com")
        client.post(
            "/api/sessions",
            json={"mentor_name": "Ms. Emily", "date": "2026-03-11", "time": "09:00"},
            headers={"Authorization": f"Bearer {first['token']}"},
        )

        response = client.get(
            "/api/sessions", headers={"Authorization": f"Bearer {second['token']}"}
        )
        assert response.json() == []

    def test_book_session_bad_date(self, client, auth_headers):
        response = client.post(
            "/api/sessions",
            json={"mentor_name": "Dr. Sarah", "date": "tomorrow", "time": "14:30"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_book_session_requires_auth(self, client):
        response = client.post(
            "/api/sessions",
            json={"mentor_name": "Dr. Sarah", "date": "2026-03-10", "time": "14:30"},
        )
        assert response.status_code == 401

    def test_book_session_blank_mentor(self, client, auth_headers):
        response = client.post(
            "/api/sessions",
            json={"mentor_name": "  ", "date": "2026-03-10", "time": "14:30"},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert client.get("/api/sessions", headers=auth_headers).json() == []


class TestFeedbackEndpoint:
    """Tests for POST /api/feedback."""

    def test_feedback_stored(self, client, auth_headers):
        response = client.post(
            "/api/feedback", json={"content": "Great courses!"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

        entries = list_feedback()
        assert len(entries) == 1
        assert entries[0].content == "Great courses!"
        assert entries[0].user_id == 1
        assert entries[0].created_at

    def test_blank_feedback_rejected(self, client, auth_headers):
        response = client.post("/api/feedback", json={"content": "   "}, headers=auth_headers)
        assert response.status_code == 400
        assert list_feedback() == []

    def test_empty_feedback_rejected(self, client, auth_headers):
        response = client.post("/api/feedback", json={"content": ""}, headers=auth_headers)
        assert response.status_code == 422
