#!/usr/bin/env python3
"""
Pytest tests for the quiz HTTP API
Covers registration, login, quiz administration, score submission and leaderboards
"""

import pytest


def register(client, username, password="secret"):
    response = client.post("/api/register", json={"username": username, "password": password})
    assert response.status_code == 201
    return response.json()["id"]


def create_quiz(client, title="General Knowledge", **extra):
    response = client.post("/api/quizzes", json={"title": title, **extra})
    assert response.status_code == 201
    return response.json()["id"]


def add_question(client, quiz_id, options=None, correct_option=1, text="2 + 2 = ?"):
    return client.post(
        "/api/questions",
        json={
            "quiz_id": quiz_id,
            "question_text": text,
            "options": options or ["4", "5"],
            "correct_option": correct_option,
        },
    )


def submit(client, user_id, quiz_id, score):
    response = client.post(
        "/api/scores", json={"user_id": user_id, "quiz_id": quiz_id, "score": score}
    )
    assert response.status_code == 201
    return response.json()


class TestAuthEndpoints:
    """Registration and login"""

    def test_register_returns_id(self, client):
        response = client.post(
            "/api/register", json={"username": "alice", "password": "secret"}
        )

        assert response.status_code == 201
        assert response.json()["id"] > 0

    def test_register_duplicate_username(self, client):
        register(client, "alice")

        response = client.post(
            "/api/register", json={"username": "alice", "password": "other"}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Username already exists"

    def test_register_requires_fields(self, client):
        response = client.post("/api/register", json={"username": "", "password": "x"})

        assert response.status_code == 422

    def test_login_returns_user_without_password(self, client):
        user_id = register(client, "alice")

        response = client.post(
            "/api/login", json={"username": "alice", "password": "secret"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user_id
        assert data["username"] == "alice"
        assert "password" not in data

    @pytest.mark.parametrize(
        "username,password", [("alice", "wrong"), ("nobody", "secret")]
    )
    def test_login_failures_are_indistinguishable(self, client, username, password):
        register(client, "alice")

        response = client.post(
            "/api/login", json={"username": username, "password": password}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"


class TestQuizEndpoints:
    """Quiz and question administration"""

    def test_create_and_list_quizzes(self, client):
        first = create_quiz(client, "History", description="Dates", is_points_based=True)
        second = create_quiz(client, "Warm-up", is_points_based=False)

        response = client.get("/api/quizzes")

        assert response.status_code == 200
        data = response.json()
        assert [q["id"] for q in data] == [first, second]
        assert data[0]["description"] == "Dates"
        assert data[1]["is_points_based"] is False
        assert data[1]["description"] is None

    def test_create_quiz_requires_title(self, client):
        response = client.post("/api/quizzes", json={"title": "   "})

        assert response.status_code == 422

    def test_add_question_and_list(self, client):
        quiz_id = create_quiz(client)

        response = add_question(client, quiz_id, options=["Paris", " ", "Rome"], correct_option=1)
        assert response.status_code == 201

        questions = client.get(f"/api/quizzes/{quiz_id}/questions").json()
        assert len(questions) == 1
        assert questions[0]["options"] == ["Paris", "Rome"]
        assert questions[0]["correct_option"] == 1

    def test_questions_keep_insertion_order(self, client):
        quiz_id = create_quiz(client)
        for text in ["first", "second", "third"]:
            assert add_question(client, quiz_id, text=text).status_code == 201

        questions = client.get(f"/api/quizzes/{quiz_id}/questions").json()

        assert [q["question_text"] for q in questions] == ["first", "second", "third"]

    def test_add_question_needs_two_options(self, client):
        quiz_id = create_quiz(client)

        response = add_question(client, quiz_id, options=["Only", ""])

        assert response.status_code == 400
        assert "at least 2 options" in response.json()["detail"]

    def test_add_question_rejects_five_options(self, client):
        quiz_id = create_quiz(client)

        response = add_question(client, quiz_id, options=["a", "b", "c", "d", "e"])

        assert response.status_code == 400

    def test_add_question_correct_option_must_exist(self, client):
        quiz_id = create_quiz(client)

        response = add_question(client, quiz_id, options=["a", "b"], correct_option=3)

        assert response.status_code == 400
        assert "between 1 and 2" in response.json()["detail"]

    def test_add_question_unknown_quiz(self, client):
        response = add_question(client, 999)

        assert response.status_code == 400

    def test_questions_of_unknown_quiz_are_empty(self, client):
        response = client.get("/api/quizzes/999/questions")

        assert response.status_code == 200
        assert response.json() == []


class TestScoreEndpoints:
    """Score submission and attempt tracking"""

    def test_submit_then_taken(self, client):
        user_id = register(client, "alice")
        quiz_id = create_quiz(client)

        data = submit(client, user_id, quiz_id, 9)

        assert data["success"] is True
        taken = client.get(f"/api/scores/user/{user_id}/taken").json()
        assert taken == {"user_id": user_id, "quiz_ids": [quiz_id]}

        records = client.get(f"/api/scores/user/{user_id}").json()
        assert [(r["quiz_id"], r["score"]) for r in records] == [(quiz_id, 9)]

    def test_negative_scores_are_stored(self, client):
        user_id = register(client, "alice")
        quiz_id = create_quiz(client)

        submit(client, user_id, quiz_id, -3)

        records = client.get(f"/api/scores/quiz/{quiz_id}").json()
        assert records[0]["score"] == -3

    def test_store_does_not_enforce_single_attempt(self, client):
        user_id = register(client, "alice")
        quiz_id = create_quiz(client)

        submit(client, user_id, quiz_id, 10)
        submit(client, user_id, quiz_id, 20)

        assert len(client.get("/api/scores").json()) == 2

    @pytest.mark.parametrize(
        "payload",
        [
            {"user_id": "abc", "quiz_id": 1, "score": 1},
            {"user_id": 1, "quiz_id": 1},
            {"user_id": True, "quiz_id": 1, "score": 1},
            {"user_id": 1, "quiz_id": 1, "score": 1.5},
        ],
    )
    def test_malformed_payload_rejected(self, client, payload):
        response = client.post("/api/scores", json=payload)

        assert response.status_code == 422

    def test_unknown_references_rejected(self, client):
        quiz_id = create_quiz(client)

        response = client.post(
            "/api/scores", json={"user_id": 42, "quiz_id": quiz_id, "score": 1}
        )

        assert response.status_code == 400
        assert "User 42" in response.json()["detail"]


class TestLeaderboardEndpoints:
    """Global and per-quiz standings"""

    def test_global_dense_rank_and_exclusion(self, client):
        alice = register(client, "alice")
        bob = register(client, "bob")
        carol = register(client, "carol")
        tester = register(client, "testuser")
        q1 = create_quiz(client, "Q1")
        q2 = create_quiz(client, "Q2")

        submit(client, alice, q1, 30)
        submit(client, alice, q2, 20)
        submit(client, bob, q1, 50)
        submit(client, carol, q2, 30)
        submit(client, tester, q1, 1000)

        data = client.get("/api/leaderboard").json()

        assert data == [
            {"username": "alice", "total_score": 50, "rank": 1},
            {"username": "bob", "total_score": 50, "rank": 1},
            {"username": "carol", "total_score": 30, "rank": 2},
        ]

    def test_two_users_with_twenty_share_rank_one(self, client):
        alice = register(client, "alice")
        bob = register(client, "bob")
        q1 = create_quiz(client, "Q1")
        q2 = create_quiz(client, "Q2")

        submit(client, alice, q1, 20)
        submit(client, bob, q2, 20)

        data = client.get("/api/leaderboard").json()

        assert [row["rank"] for row in data] == [1, 1]

    def test_quiz_leaderboard_uses_raw_records(self, client):
        alice = register(client, "alice")
        bob = register(client, "bob")
        q1 = create_quiz(client, "Q1")
        q2 = create_quiz(client, "Q2")

        submit(client, alice, q1, 10)
        submit(client, alice, q1, 10)
        submit(client, bob, q1, 5)
        submit(client, bob, q2, 99)

        data = client.get(f"/api/leaderboard/{q1}").json()

        assert data == [
            {"username": "alice", "score": 10, "rank": 1},
            {"username": "alice", "score": 10, "rank": 1},
            {"username": "bob", "score": 5, "rank": 2},
        ]

    def test_empty_leaderboard(self, client):
        assert client.get("/api/leaderboard").json() == []
