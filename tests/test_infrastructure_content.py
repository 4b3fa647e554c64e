"""
Tests for the content infrastructure adapters.

Repositories run against a real in-memory SQLite database, one per
test. Hasher and signer run their real libraries.
"""

import pytest
from jose import jwt

from conduit.domain.content.entities import ArticleFilter
from conduit.domain.content.errors import NotFoundError
from conduit.infrastructure.content.article_repository import ArticleRepositoryAdapter
from conduit.infrastructure.content.comment_repository import CommentRepositoryAdapter
from conduit.infrastructure.content.tag_repository import TagRepositoryAdapter
from conduit.infrastructure.content.token_signer import JwtTokenSigner
from conduit.infrastructure.content.user_repository import UserRepositoryAdapter


@pytest.fixture
def users(session) -> UserRepositoryAdapter:
    return UserRepositoryAdapter(session)


@pytest.fixture
def articles(session) -> ArticleRepositoryAdapter:
    return ArticleRepositoryAdapter(session)


@pytest.fixture
def comments(session) -> CommentRepositoryAdapter:
    return CommentRepositoryAdapter(session)


@pytest.fixture
def alice(users):
    return users.create(username="alice", email="alice@example.com", password_hash="x")


@pytest.fixture
def bob(users):
    return users.create(username="bob", email="bob@example.com", password_hash="x")


def publish(articles, author, title, tags=()):
    slug = title.lower().replace(" ", "-")
    return articles.create(
        author_id=author.id,
        slug=slug,
        title=title,
        description="Test Description",
        body="Test Body",
        tag_names=list(tags),
    )


# ══════════════════════════════════════════════════════════════════════
# Users and follows
# ══════════════════════════════════════════════════════════════════════


class TestUserRepositoryAdapter:
    """Tests for UserRepositoryAdapter."""

    def test_create_and_lookup(self, users, alice) -> None:
        assert alice.id is not None
        assert users.get_by_id(alice.id) == alice
        assert users.get_by_email("alice@example.com") == alice
        assert users.get_by_username("alice") == alice
        assert users.get_by_username("ghost") is None

    def test_update_columns(self, users, alice) -> None:
        updated = users.update(alice.id, {"bio": "Updated bio", "image": "http://img"})
        assert updated.bio == "Updated bio"
        assert updated.image == "http://img"
        assert updated.username == "alice"

    def test_update_rejects_unknown_column(self, users, alice) -> None:
        with pytest.raises(ValueError):
            users.update(alice.id, {"id": 99})

    def test_update_missing_user(self, users) -> None:
        with pytest.raises(NotFoundError):
            users.update(999, {"bio": "x"})

    def test_follow_is_idempotent(self, users, alice, bob) -> None:
        users.add_follow(alice.id, bob.id)
        users.add_follow(alice.id, bob.id)
        assert users.get_profile("bob", viewer_id=alice.id).following is True
        # Relations are directed.
        assert users.get_profile("alice", viewer_id=bob.id).following is False

        users.remove_follow(alice.id, bob.id)
        users.remove_follow(alice.id, bob.id)
        assert users.get_profile("bob", viewer_id=alice.id).following is False

    def test_profile_without_viewer(self, users, alice) -> None:
        profile = users.get_profile("alice")
        assert profile.username == "alice"
        assert profile.following is False
        assert users.get_profile("ghost") is None


# ══════════════════════════════════════════════════════════════════════
# Articles, favorites and listing
# ══════════════════════════════════════════════════════════════════════


class TestArticleRepositoryAdapter:
    """Tests for ArticleRepositoryAdapter."""

    def test_create_and_read(self, articles, alice) -> None:
        created = publish(articles, alice, "Test Title", tags=["zeta", "alpha"])
        loaded = articles.get_by_slug("test-title")

        assert loaded.id == created.id
        assert loaded.author.username == "alice"
        assert loaded.tag_list == ["alpha", "zeta"]
        assert loaded.favorited is False
        assert loaded.favorites_count == 0
        assert loaded.created_at.tzinfo is not None
        assert loaded.created_at.utcoffset().total_seconds() == 0
        assert articles.get_by_slug("missing") is None

    def test_title_and_slug_lookups(self, articles, alice) -> None:
        created = publish(articles, alice, "Test Title")
        assert articles.title_exists("Test Title") is True
        assert articles.title_exists("Test Title", exclude_id=created.id) is False
        assert articles.slug_exists("test-title") is True
        assert articles.slug_exists("other") is False

    def test_tags_are_shared_between_articles(self, session, articles, alice) -> None:
        publish(articles, alice, "One", tags=["python"])
        publish(articles, alice, "Two", tags=["python", "sql"])
        assert TagRepositoryAdapter(session).list_names() == ["python", "sql"]

    def test_update_fields_and_tags(self, articles, alice) -> None:
        created = publish(articles, alice, "Test Title", tags=["old"])
        updated = articles.update(
            created.id, {"body": "Updated Body"}, tag_names=["new"]
        )
        assert updated.body == "Updated Body"
        assert updated.tag_list == ["new"]
        assert updated.slug == "test-title"
        assert updated.updated_at >= created.updated_at

    def test_update_rejects_unknown_column(self, articles, alice) -> None:
        created = publish(articles, alice, "Test Title")
        with pytest.raises(ValueError):
            articles.update(created.id, {"slug": "renamed"})

    def test_favorite_is_idempotent(self, articles, alice, bob) -> None:
        created = publish(articles, alice, "Test Title")

        articles.add_favorite(bob.id, created.id)
        articles.add_favorite(bob.id, created.id)
        seen_by_bob = articles.get_by_slug("test-title", viewer_id=bob.id)
        assert seen_by_bob.favorited is True
        assert seen_by_bob.favorites_count == 1
        assert articles.get_by_slug("test-title", viewer_id=alice.id).favorited is False

        articles.remove_favorite(bob.id, created.id)
        articles.remove_favorite(bob.id, created.id)
        assert articles.get_by_slug("test-title", viewer_id=bob.id).favorites_count == 0

    def test_delete_removes_comments(self, articles, comments, alice, bob) -> None:
        created = publish(articles, alice, "Test Title")
        comment = comments.create(article_id=created.id, author_id=bob.id, body="Hi")
        articles.add_favorite(bob.id, created.id)

        articles.delete(created.id)

        assert articles.get_by_slug("test-title") is None
        assert comments.get_by_id(comment.id) is None

    def test_delete_missing_article(self, articles) -> None:
        with pytest.raises(NotFoundError):
            articles.delete(999)


class TestFindAndCount:
    """Tests for the filtered, paginated listing."""

    @pytest.fixture(autouse=True)
    def seed(self, users, articles, alice, bob) -> None:
        publish(articles, alice, "Alpha", tags=["python"])
        publish(articles, alice, "Beta", tags=["rust"])
        beta = articles.get_by_slug("beta")
        publish(articles, bob, "Gamma", tags=["python"])
        articles.add_favorite(bob.id, beta.id)
        users.add_follow(bob.id, alice.id)
        self.alice = alice
        self.bob = bob

    def _slugs(self, page) -> list[str]:
        return [article.slug for article in page.articles]

    def test_no_filters_returns_all_newest_first(self, articles) -> None:
        page = articles.find_and_count(ArticleFilter(), limit=20, offset=0)
        assert page.count == 3
        assert self._slugs(page) == ["gamma", "beta", "alpha"]

    def test_author_filter(self, articles) -> None:
        page = articles.find_and_count(ArticleFilter(author="alice"), limit=20, offset=0)
        assert sorted(self._slugs(page)) == ["alpha", "beta"]

    def test_tag_filter(self, articles) -> None:
        page = articles.find_and_count(ArticleFilter(tag="python"), limit=20, offset=0)
        assert sorted(self._slugs(page)) == ["alpha", "gamma"]

    def test_favorited_filter(self, articles) -> None:
        page = articles.find_and_count(
            ArticleFilter(favorited_by_id=self.bob.id), limit=20, offset=0
        )
        assert self._slugs(page) == ["beta"]

    def test_followed_filter(self, articles) -> None:
        page = articles.find_and_count(
            ArticleFilter(followed_by_id=self.bob.id), limit=20, offset=0
        )
        assert sorted(self._slugs(page)) == ["alpha", "beta"]

    def test_filters_combine(self, articles) -> None:
        page = articles.find_and_count(
            ArticleFilter(author="alice", tag="python"), limit=20, offset=0
        )
        assert self._slugs(page) == ["alpha"]
        assert page.count == 1

    def test_no_match_is_empty(self, articles) -> None:
        page = articles.find_and_count(ArticleFilter(tag="haskell"), limit=20, offset=0)
        assert page.articles == []
        assert page.count == 0

    def test_count_ignores_pagination(self, articles) -> None:
        page = articles.find_and_count(ArticleFilter(), limit=1, offset=1)
        assert self._slugs(page) == ["beta"]
        assert page.count == 3

    def test_viewer_flags(self, articles) -> None:
        page = articles.find_and_count(
            ArticleFilter(author="alice"), limit=20, offset=0, viewer_id=self.bob.id
        )
        beta = next(a for a in page.articles if a.slug == "beta")
        assert beta.favorited is True
        assert beta.author.following is True


# ══════════════════════════════════════════════════════════════════════
# Comments
# ══════════════════════════════════════════════════════════════════════


class TestCommentRepositoryAdapter:
    """Tests for CommentRepositoryAdapter."""

    def test_create_list_delete(self, articles, comments, alice, bob) -> None:
        article = publish(articles, alice, "Test Title")
        first = comments.create(article_id=article.id, author_id=bob.id, body="First")
        second = comments.create(article_id=article.id, author_id=alice.id, body="Second")

        listed = comments.list_for_article(article.id)
        assert [c.id for c in listed] == [first.id, second.id]
        assert listed[0].author.username == "bob"
        assert listed[0].created_at.tzinfo is not None
        assert first.article_id == article.id

        comments.delete(first.id)
        assert [c.id for c in comments.list_for_article(article.id)] == [second.id]

    def test_delete_missing_comment(self, comments) -> None:
        with pytest.raises(NotFoundError):
            comments.delete(999)


# ══════════════════════════════════════════════════════════════════════
# Credentials
# ══════════════════════════════════════════════════════════════════════


class TestBcryptPasswordHasher:
    """Tests for BcryptPasswordHasher."""

    def test_hash_is_salted_and_verifiable(self, hasher) -> None:
        first = hasher.hash("password")
        second = hasher.hash("password")
        assert first != "password"
        assert first != second
        assert hasher.verify("password", first) is True
        assert hasher.verify("wrong", first) is False


class TestJwtTokenSigner:
    """Tests for JwtTokenSigner."""

    def test_round_trip(self, signer) -> None:
        token = signer.sign(42)
        assert signer.verify(token) == 42

    def test_wrong_secret_is_rejected(self, signer) -> None:
        other = JwtTokenSigner(secret_key="another-secret")
        assert other.verify(signer.sign(42)) is None

    def test_garbage_is_rejected(self, signer) -> None:
        assert signer.verify("not-a-token") is None

    def test_expired_token_is_rejected(self) -> None:
        signer = JwtTokenSigner(secret_key="test-secret", expire_minutes=-1)
        assert signer.verify(signer.sign(42)) is None

    def test_non_numeric_subject_is_rejected(self, signer) -> None:
        token = jwt.encode({"sub": "alice"}, "test-secret", algorithm="HS256")
        assert signer.verify(token) is None
