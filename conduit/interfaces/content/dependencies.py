"""
Dependency injection for the content bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection. The request-scoped
SQLAlchemy session is passed explicitly to every repository adapter.
These are the composition root for the content context.
"""

from functools import lru_cache
from typing import Iterator, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session, sessionmaker

from conduit.application.content.create_article import CreateArticleUseCase
from conduit.application.content.create_comment import CreateCommentUseCase
from conduit.application.content.delete_article import DeleteArticleUseCase
from conduit.application.content.delete_comment import DeleteCommentUseCase
from conduit.application.content.favorite_article import FavoriteArticleUseCase
from conduit.application.content.feed_articles import FeedArticlesUseCase
from conduit.application.content.follow_profile import FollowProfileUseCase
from conduit.application.content.get_article import GetArticleUseCase
from conduit.application.content.get_current_user import GetCurrentUserUseCase
from conduit.application.content.get_profile import GetProfileUseCase
from conduit.application.content.list_articles import ListArticlesUseCase
from conduit.application.content.list_comments import ListCommentsUseCase
from conduit.application.content.list_tags import ListTagsUseCase
from conduit.application.content.login_user import LoginUserUseCase
from conduit.application.content.register_user import RegisterUserUseCase
from conduit.application.content.update_article import UpdateArticleUseCase
from conduit.application.content.update_user import UpdateUserUseCase
from conduit.core.config import settings
from conduit.domain.content.entities import Caller
from conduit.domain.content.errors import UnauthorizedError
from conduit.domain.content.ports import PasswordHasher, TokenSigner
from conduit.infrastructure.content.article_repository import ArticleRepositoryAdapter
from conduit.infrastructure.content.comment_repository import CommentRepositoryAdapter
from conduit.infrastructure.content.database import build_session_factory, get_engine
from conduit.infrastructure.content.password_hasher import BcryptPasswordHasher
from conduit.infrastructure.content.tag_repository import TagRepositoryAdapter
from conduit.infrastructure.content.token_signer import JwtTokenSigner
from conduit.infrastructure.content.user_repository import UserRepositoryAdapter

TOKEN_SCHEMES = ("token", "bearer")


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    """Build the session factory bound to the application engine."""
    return build_session_factory(get_engine())


def get_session() -> Iterator[Session]:
    """Yield a request-scoped session, closed (and rolled back) afterwards."""
    session = _session_factory()()
    try:
        yield session
    finally:
        session.close()


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    """Return the bcrypt password hasher configured from settings."""
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


@lru_cache(maxsize=1)
def get_token_signer() -> TokenSigner:
    """Return the JWT signer configured from settings."""
    return JwtTokenSigner(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


def get_caller(
    authorization: Optional[str] = Header(default=None),
    session: Session = Depends(get_session),
    signer: TokenSigner = Depends(get_token_signer),
) -> Optional[Caller]:
    """Resolve the caller from an ``Authorization: Token <jwt>`` header.

    Returns None when no header is sent. A header that is present but
    malformed, carries an invalid or expired token, or names a user that
    no longer exists is rejected.

    Raises:
        UnauthorizedError: If a presented token cannot be trusted.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() not in TOKEN_SCHEMES or not token:
        raise UnauthorizedError("Malformed authorization header")
    user_id = signer.verify(token)
    if user_id is None:
        raise UnauthorizedError("Invalid or expired token")
    user = UserRepositoryAdapter(session).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return Caller(id=user.id, username=user.username, token=token)


# ------------------------------------------------------------------
# Users and profiles
# ------------------------------------------------------------------


def get_register_user_use_case(
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> RegisterUserUseCase:
    """Build RegisterUserUseCase with its infrastructure dependencies."""
    return RegisterUserUseCase(
        user_repo=UserRepositoryAdapter(session), hasher=hasher, signer=signer
    )


def get_login_user_use_case(
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> LoginUserUseCase:
    """Build LoginUserUseCase with its infrastructure dependencies."""
    return LoginUserUseCase(
        user_repo=UserRepositoryAdapter(session), hasher=hasher, signer=signer
    )


def get_current_user_use_case(
    session: Session = Depends(get_session),
) -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(user_repo=UserRepositoryAdapter(session))


def get_update_user_use_case(
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UpdateUserUseCase:
    return UpdateUserUseCase(user_repo=UserRepositoryAdapter(session), hasher=hasher)


def get_profile_use_case(session: Session = Depends(get_session)) -> GetProfileUseCase:
    return GetProfileUseCase(user_repo=UserRepositoryAdapter(session))


def get_follow_profile_use_case(
    session: Session = Depends(get_session),
) -> FollowProfileUseCase:
    return FollowProfileUseCase(user_repo=UserRepositoryAdapter(session))


# ------------------------------------------------------------------
# Articles, comments and tags
# ------------------------------------------------------------------


def get_list_articles_use_case(
    session: Session = Depends(get_session),
) -> ListArticlesUseCase:
    return ListArticlesUseCase(
        article_repo=ArticleRepositoryAdapter(session),
        user_repo=UserRepositoryAdapter(session),
    )


def get_feed_articles_use_case(
    session: Session = Depends(get_session),
) -> FeedArticlesUseCase:
    return FeedArticlesUseCase(article_repo=ArticleRepositoryAdapter(session))


def get_article_use_case(session: Session = Depends(get_session)) -> GetArticleUseCase:
    return GetArticleUseCase(article_repo=ArticleRepositoryAdapter(session))


def get_create_article_use_case(
    session: Session = Depends(get_session),
) -> CreateArticleUseCase:
    return CreateArticleUseCase(article_repo=ArticleRepositoryAdapter(session))


def get_update_article_use_case(
    session: Session = Depends(get_session),
) -> UpdateArticleUseCase:
    return UpdateArticleUseCase(article_repo=ArticleRepositoryAdapter(session))


def get_delete_article_use_case(
    session: Session = Depends(get_session),
) -> DeleteArticleUseCase:
    return DeleteArticleUseCase(article_repo=ArticleRepositoryAdapter(session))


def get_favorite_article_use_case(
    session: Session = Depends(get_session),
) -> FavoriteArticleUseCase:
    return FavoriteArticleUseCase(article_repo=ArticleRepositoryAdapter(session))


def get_list_comments_use_case(
    session: Session = Depends(get_session),
) -> ListCommentsUseCase:
    return ListCommentsUseCase(
        article_repo=ArticleRepositoryAdapter(session),
        comment_repo=CommentRepositoryAdapter(session),
    )


def get_create_comment_use_case(
    session: Session = Depends(get_session),
) -> CreateCommentUseCase:
    return CreateCommentUseCase(
        article_repo=ArticleRepositoryAdapter(session),
        comment_repo=CommentRepositoryAdapter(session),
    )


def get_delete_comment_use_case(
    session: Session = Depends(get_session),
) -> DeleteCommentUseCase:
    return DeleteCommentUseCase(
        article_repo=ArticleRepositoryAdapter(session),
        comment_repo=CommentRepositoryAdapter(session),
    )


def get_list_tags_use_case(session: Session = Depends(get_session)) -> ListTagsUseCase:
    return ListTagsUseCase(tag_repo=TagRepositoryAdapter(session))
