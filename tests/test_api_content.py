"""
Tests for the content API routes.

Runs the full application stack against an in-memory SQLite store
using FastAPI's TestClient. Verifies status codes, the JSON envelopes
and the error body shape.
"""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from conduit.interfaces.content.dependencies import (
    get_list_tags_use_case,
    get_session,
)

PASSWORD = "password123"


def register(client, username: str) -> str:
    response = client.post(
        "/api/users",
        json={
            "user": {
                "username": username,
                "email": f"{username}@example.com",
                "password": PASSWORD,
            }
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]["token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Token {token}"}


def publish(client, token: str, title: str = "How to train your dragon", tags=None):
    response = client.post(
        "/api/articles",
        json={
            "article": {
                "title": title,
                "description": "Ever wonder how?",
                "body": "You have to believe",
                "tagList": tags or [],
            }
        },
        headers=auth(token),
    )
    assert response.status_code == 201, response.text
    return response.json()["article"]


def error_messages(response) -> list[str]:
    return response.json()["errors"]["body"]


# ══════════════════════════════════════════════════════════════════════
# Health and cross-cutting concerns
# ══════════════════════════════════════════════════════════════════════


class TestHealth:
    def test_health_returns_ok(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["database"] == "ok"
        assert response.json()["version"]

    def test_unreachable_store_is_degraded(self, client) -> None:
        broken = MagicMock()
        broken.execute.side_effect = SQLAlchemyError("connection refused")
        client.app.dependency_overrides[get_session] = lambda: broken

        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"

    def test_security_headers_are_set(self, client) -> None:
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Content-Security-Policy" in response.headers


class TestErrorEnvelope:
    def test_unexpected_error_is_generic_500(self, client) -> None:
        class Exploding:
            def execute(self):
                raise RuntimeError("database password is hunter2")

        client.app.dependency_overrides[get_list_tags_use_case] = lambda: Exploding()
        quiet = TestClient(client.app, raise_server_exceptions=False)

        response = quiet.get("/api/tags")

        assert response.status_code == 500
        assert response.json() == {"errors": {"body": ["Internal server error"]}}

    def test_bad_query_parameter_uses_envelope(self, client) -> None:
        response = client.get("/api/articles", params={"limit": 0})
        assert response.status_code == 422
        assert error_messages(response)


# ══════════════════════════════════════════════════════════════════════
# Users
# ══════════════════════════════════════════════════════════════════════


class TestUsers:
    """Tests for sign-up, sign-in and the current user."""

    def test_register_returns_user_with_token(self, client) -> None:
        response = client.post(
            "/api/users",
            json={
                "user": {
                    "username": "jake",
                    "email": "jake@jake.jake",
                    "password": PASSWORD,
                }
            },
        )
        assert response.status_code == 201
        user = response.json()["user"]
        assert user["username"] == "jake"
        assert user["email"] == "jake@jake.jake"
        assert user["token"]
        assert user["bio"] is None

    def test_register_missing_field(self, client) -> None:
        response = client.post(
            "/api/users", json={"user": {"username": "jake", "password": PASSWORD}}
        )
        assert response.status_code == 422
        assert error_messages(response) == ["email can't be blank"]

    def test_register_taken_email(self, client) -> None:
        register(client, "jake")
        response = client.post(
            "/api/users",
            json={
                "user": {
                    "username": "other",
                    "email": "jake@example.com",
                    "password": PASSWORD,
                }
            },
        )
        assert response.status_code == 422
        assert error_messages(response) == ["email has already been taken"]

    def test_login(self, client) -> None:
        register(client, "jake")
        response = client.post(
            "/api/users/login",
            json={"user": {"email": "jake@example.com", "password": PASSWORD}},
        )
        assert response.status_code == 200
        assert response.json()["user"]["token"]

    def test_login_wrong_password(self, client) -> None:
        register(client, "jake")
        response = client.post(
            "/api/users/login",
            json={"user": {"email": "jake@example.com", "password": "wrong"}},
        )
        assert response.status_code == 422
        assert error_messages(response) == ["Wrong email/password combination"]

    def test_login_unknown_email(self, client) -> None:
        response = client.post(
            "/api/users/login",
            json={"user": {"email": "ghost@example.com", "password": PASSWORD}},
        )
        assert response.status_code == 404

    def test_current_user_requires_token(self, client) -> None:
        response = client.get("/api/user")
        assert response.status_code == 401
        assert response.json() == {"errors": {"body": ["Login required"]}}

    def test_invalid_token_is_rejected(self, client) -> None:
        response = client.get("/api/user", headers=auth("not-a-jwt"))
        assert response.status_code == 401

    def test_malformed_header_is_rejected(self, client) -> None:
        token = register(client, "jake")
        response = client.get("/api/user", headers={"Authorization": token})
        assert response.status_code == 401

    def test_current_user_echoes_token(self, client) -> None:
        token = register(client, "jake")
        response = client.get("/api/user", headers=auth(token))
        assert response.status_code == 200
        assert response.json()["user"]["token"] == token

    def test_bearer_scheme_is_accepted(self, client) -> None:
        token = register(client, "jake")
        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    def test_update_user(self, client) -> None:
        token = register(client, "jake")
        response = client.put(
            "/api/user",
            json={"user": {"bio": "I like to skateboard", "image": "http://img/j.png"}},
            headers=auth(token),
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["bio"] == "I like to skateboard"
        assert user["image"] == "http://img/j.png"

    def test_update_password_allows_new_login(self, client) -> None:
        token = register(client, "jake")
        client.put(
            "/api/user", json={"user": {"password": "new-secret"}}, headers=auth(token)
        )
        response = client.post(
            "/api/users/login",
            json={"user": {"email": "jake@example.com", "password": "new-secret"}},
        )
        assert response.status_code == 200

    def test_blank_credentials_keep_account_usable(self, client) -> None:
        token = register(client, "jake")
        response = client.put(
            "/api/user",
            json={"user": {"email": "", "username": "", "password": ""}},
            headers=auth(token),
        )
        assert response.status_code == 422
        assert error_messages(response) == ["username can't be blank"]

        login = client.post(
            "/api/users/login",
            json={"user": {"email": "jake@example.com", "password": PASSWORD}},
        )
        assert login.status_code == 200
        assert client.get("/api/profiles/jake").status_code == 200

    def test_update_user_taken_username(self, client) -> None:
        register(client, "alice")
        token = register(client, "jake")
        response = client.put(
            "/api/user", json={"user": {"username": "alice"}}, headers=auth(token)
        )
        assert response.status_code == 422


# ══════════════════════════════════════════════════════════════════════
# Profiles
# ══════════════════════════════════════════════════════════════════════


class TestProfiles:
    """Tests for reading profiles and toggling follows."""

    def test_get_profile(self, client) -> None:
        register(client, "celeb")
        response = client.get("/api/profiles/celeb")
        assert response.status_code == 200
        assert response.json()["profile"] == {
            "username": "celeb",
            "bio": None,
            "image": None,
            "following": False,
        }

    def test_unknown_profile(self, client) -> None:
        assert client.get("/api/profiles/ghost").status_code == 404

    def test_follow_and_unfollow(self, client) -> None:
        register(client, "celeb")
        token = register(client, "fan")

        followed = client.post("/api/profiles/celeb/follow", headers=auth(token))
        assert followed.status_code == 200
        assert followed.json()["profile"]["following"] is True

        again = client.post("/api/profiles/celeb/follow", headers=auth(token))
        assert again.json()["profile"]["following"] is True

        viewed = client.get("/api/profiles/celeb", headers=auth(token))
        assert viewed.json()["profile"]["following"] is True

        unfollowed = client.delete("/api/profiles/celeb/follow", headers=auth(token))
        assert unfollowed.json()["profile"]["following"] is False

    def test_follow_requires_token(self, client) -> None:
        register(client, "celeb")
        assert client.post("/api/profiles/celeb/follow").status_code == 401

    def test_follow_unknown_user(self, client) -> None:
        token = register(client, "fan")
        response = client.post("/api/profiles/ghost/follow", headers=auth(token))
        assert response.status_code == 404


# ══════════════════════════════════════════════════════════════════════
# Articles
# ══════════════════════════════════════════════════════════════════════


class TestArticles:
    """Tests for article creation, reads, edits and deletion."""

    def test_create_article(self, client) -> None:
        token = register(client, "jake")
        article = publish(client, token, tags=["training", "dragons"])

        assert article["slug"] == "how-to-train-your-dragon"
        assert article["tagList"] == ["dragons", "training"]
        assert article["favorited"] is False
        assert article["favoritesCount"] == 0
        assert article["author"]["username"] == "jake"
        assert "createdAt" in article and "updatedAt" in article

    def test_create_requires_token(self, client) -> None:
        response = client.post("/api/articles", json={"article": {"title": "x"}})
        assert response.status_code == 401

    def test_create_missing_title(self, client) -> None:
        token = register(client, "jake")
        response = client.post(
            "/api/articles",
            json={"article": {"description": "d", "body": "b"}},
            headers=auth(token),
        )
        assert response.status_code == 422
        assert error_messages(response) == ["title can't be blank"]

    def test_create_taken_title(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        response = client.post(
            "/api/articles",
            json={
                "article": {
                    "title": "How to train your dragon",
                    "description": "d",
                    "body": "b",
                }
            },
            headers=auth(token),
        )
        assert response.status_code == 422
        assert error_messages(response) == ["title has already been taken"]

    def test_colliding_slugs_get_suffix(self, client) -> None:
        token = register(client, "jake")
        first = publish(client, token, title="Hello World!")
        second = publish(client, token, title="Hello, World")
        assert first["slug"] == "hello-world"
        assert second["slug"] == "hello-world-2"

    def test_get_article(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        response = client.get("/api/articles/how-to-train-your-dragon")
        assert response.status_code == 200
        assert response.json()["article"]["title"] == "How to train your dragon"

    def test_update_by_author(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        response = client.put(
            "/api/articles/how-to-train-your-dragon",
            json={"article": {"title": "Did you train your dragon?", "body": "Yes"}},
            headers=auth(token),
        )
        assert response.status_code == 200
        article = response.json()["article"]
        assert article["title"] == "Did you train your dragon?"
        assert article["body"] == "Yes"
        assert article["description"] == "Ever wonder how?"
        assert article["slug"] == "how-to-train-your-dragon"

    def test_update_with_blank_fields_is_rejected(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        response = client.put(
            "/api/articles/how-to-train-your-dragon",
            json={"article": {"title": "   ", "body": ""}},
            headers=auth(token),
        )
        assert response.status_code == 422
        assert error_messages(response) == ["title can't be blank"]
        unchanged = client.get("/api/articles/how-to-train-your-dragon").json()
        assert unchanged["article"]["title"] == "How to train your dragon"
        assert unchanged["article"]["body"] == "You have to believe"

    def test_timestamps_carry_utc_offset(self, client) -> None:
        token = register(client, "jake")
        article = publish(client, token)
        fetched = client.get("/api/articles/how-to-train-your-dragon").json()
        for value in (
            article["createdAt"],
            fetched["article"]["createdAt"],
            fetched["article"]["updatedAt"],
        ):
            assert value.endswith(("Z", "+00:00"))

    def test_update_by_other_user_is_forbidden(self, client) -> None:
        owner = register(client, "jake")
        intruder = register(client, "mallory")
        publish(client, owner)
        response = client.put(
            "/api/articles/how-to-train-your-dragon",
            json={"article": {"body": "pwned"}},
            headers=auth(intruder),
        )
        assert response.status_code == 403
        unchanged = client.get("/api/articles/how-to-train-your-dragon")
        assert unchanged.json()["article"]["body"] == "You have to believe"

    def test_missing_article_wins_over_ownership(self, client) -> None:
        token = register(client, "mallory")
        response = client.put(
            "/api/articles/missing",
            json={"article": {"body": "x"}},
            headers=auth(token),
        )
        assert response.status_code == 404

    def test_update_requires_token(self, client) -> None:
        response = client.put("/api/articles/missing", json={"article": {"body": "x"}})
        assert response.status_code == 401

    def test_register_login_publish_delete(self, client) -> None:
        register(client, "jake")
        login = client.post(
            "/api/users/login",
            json={"user": {"email": "jake@example.com", "password": PASSWORD}},
        )
        token = login.json()["user"]["token"]
        publish(client, token)

        response = client.delete(
            "/api/articles/how-to-train-your-dragon", headers=auth(token)
        )
        assert response.status_code == 200
        assert response.json() == {"message": {"body": ["Article deleted successfully"]}}
        assert client.get("/api/articles/how-to-train-your-dragon").status_code == 404

    def test_delete_by_other_user_is_forbidden(self, client) -> None:
        owner = register(client, "jake")
        intruder = register(client, "mallory")
        publish(client, owner)
        response = client.delete(
            "/api/articles/how-to-train-your-dragon", headers=auth(intruder)
        )
        assert response.status_code == 403
        assert client.get("/api/articles/how-to-train-your-dragon").status_code == 200


class TestFavorites:
    def test_favorite_toggle(self, client) -> None:
        author = register(client, "jake")
        fan = register(client, "fan")
        publish(client, author)
        url = "/api/articles/how-to-train-your-dragon/favorite"

        client.post(url, headers=auth(fan))
        response = client.post(url, headers=auth(fan))
        assert response.status_code == 200
        article = response.json()["article"]
        assert article["favorited"] is True
        assert article["favoritesCount"] == 1

        response = client.delete(url, headers=auth(fan))
        article = response.json()["article"]
        assert article["favorited"] is False
        assert article["favoritesCount"] == 0

    def test_favorite_unknown_article(self, client) -> None:
        token = register(client, "fan")
        response = client.post("/api/articles/missing/favorite", headers=auth(token))
        assert response.status_code == 404

    def test_favorite_requires_token(self, client) -> None:
        assert client.delete("/api/articles/missing/favorite").status_code == 401


class TestListing:
    """Tests for the filtered listing and the feed."""

    def _seed(self, client) -> dict:
        alice = register(client, "alice")
        bob = register(client, "bob")
        publish(client, alice, title="Alpha", tags=["python"])
        publish(client, alice, title="Beta", tags=["rust"])
        publish(client, bob, title="Gamma", tags=["python"])
        client.post("/api/articles/beta/favorite", headers=auth(bob))
        return {"alice": alice, "bob": bob}

    def _slugs(self, response) -> list[str]:
        return [a["slug"] for a in response.json()["articles"]]

    def test_empty_store(self, client) -> None:
        response = client.get("/api/articles")
        assert response.status_code == 200
        assert response.json() == {"articles": [], "articlesCount": 0}

    def test_all_articles_newest_first(self, client) -> None:
        self._seed(client)
        response = client.get("/api/articles")
        assert self._slugs(response) == ["gamma", "beta", "alpha"]
        assert response.json()["articlesCount"] == 3

    def test_filter_by_author_and_tag(self, client) -> None:
        self._seed(client)
        response = client.get("/api/articles", params={"author": "alice", "tag": "python"})
        assert self._slugs(response) == ["alpha"]

    def test_filter_by_favorited(self, client) -> None:
        self._seed(client)
        response = client.get("/api/articles", params={"favorited": "bob"})
        assert self._slugs(response) == ["beta"]

    def test_unknown_favorited_user_gives_empty_page(self, client) -> None:
        self._seed(client)
        response = client.get("/api/articles", params={"favorited": "ghost"})
        assert response.json() == {"articles": [], "articlesCount": 0}

    def test_pagination_keeps_total(self, client) -> None:
        self._seed(client)
        response = client.get("/api/articles", params={"limit": 1, "offset": 1})
        assert self._slugs(response) == ["beta"]
        assert response.json()["articlesCount"] == 3

    def test_feed(self, client) -> None:
        tokens = self._seed(client)
        client.post("/api/profiles/alice/follow", headers=auth(tokens["bob"]))
        response = client.get("/api/articles/feed", headers=auth(tokens["bob"]))
        assert response.status_code == 200
        assert self._slugs(response) == ["beta", "alpha"]
        assert all(a["author"]["following"] for a in response.json()["articles"])

    def test_feed_requires_token(self, client) -> None:
        assert client.get("/api/articles/feed").status_code == 401

    def test_tags(self, client) -> None:
        self._seed(client)
        response = client.get("/api/tags")
        assert response.json() == {"tags": ["python", "rust"]}


# ══════════════════════════════════════════════════════════════════════
# Comments
# ══════════════════════════════════════════════════════════════════════


class TestComments:
    URL = "/api/articles/how-to-train-your-dragon/comments"

    def _comment(self, client, token: str, body: str = "Thank you so much!") -> dict:
        response = client.post(
            self.URL, json={"comment": {"body": body}}, headers=auth(token)
        )
        assert response.status_code == 201, response.text
        return response.json()["comment"]

    def test_create_and_list(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        comment = self._comment(client, token)

        assert comment["body"] == "Thank you so much!"
        assert comment["author"]["username"] == "jake"

        response = client.get(self.URL)
        assert response.status_code == 200
        assert [c["id"] for c in response.json()["comments"]] == [comment["id"]]

    def test_create_missing_body(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        response = client.post(self.URL, json={"comment": {}}, headers=auth(token))
        assert response.status_code == 422
        assert error_messages(response) == ["body can't be blank"]

    def test_create_on_missing_article(self, client) -> None:
        token = register(client, "jake")
        response = client.post(
            "/api/articles/missing/comments",
            json={"comment": {"body": "hi"}},
            headers=auth(token),
        )
        assert response.status_code == 404

    def test_list_on_missing_article(self, client) -> None:
        assert client.get("/api/articles/missing/comments").status_code == 404

    def test_delete_own_comment(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        comment = self._comment(client, token)

        response = client.delete(f"{self.URL}/{comment['id']}", headers=auth(token))
        assert response.status_code == 200
        assert response.json() == {"message": {"body": ["Comment deleted successfully"]}}
        assert client.get(self.URL).json()["comments"] == []

    def test_delete_other_users_comment_is_forbidden(self, client) -> None:
        token = register(client, "jake")
        intruder = register(client, "mallory")
        publish(client, token)
        comment = self._comment(client, token)

        response = client.delete(f"{self.URL}/{comment['id']}", headers=auth(intruder))
        assert response.status_code == 403

    def test_delete_through_wrong_article_is_not_found(self, client) -> None:
        token = register(client, "jake")
        publish(client, token)
        publish(client, token, title="Another one")
        comment = self._comment(client, token)

        response = client.delete(
            f"/api/articles/another-one/comments/{comment['id']}", headers=auth(token)
        )
        assert response.status_code == 404
