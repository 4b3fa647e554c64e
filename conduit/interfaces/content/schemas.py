"""
Pydantic schemas for content API request/response validation.

These schemas define the API contract: every payload is wrapped in a
named envelope ("user", "article", ...) and keys are camelCase on the
wire. Payload fields are optional here on purpose: missing required
fields are reported by the use cases as FieldRequiredError.
No business logic belongs here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from conduit.application.content.dtos import UserResult
from conduit.domain.content.entities import Article, Comment, Profile


class CamelModel(BaseModel):
    """Base schema with camelCase aliases that also accepts field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------------------------------------------------------
# Requests
# ------------------------------------------------------------------


class NewUser(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class NewUserRequest(CamelModel):
    """Request schema for sign-up."""

    user: NewUser = Field(default_factory=NewUser)


class LoginUser(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginUserRequest(CamelModel):
    """Request schema for sign-in."""

    user: LoginUser = Field(default_factory=LoginUser)


class UpdateUser(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None


class UpdateUserRequest(CamelModel):
    """Request schema for updating the current user."""

    user: UpdateUser = Field(default_factory=UpdateUser)


class ArticleFields(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    body: Optional[str] = None
    tag_list: Optional[list[str]] = None


class NewArticleRequest(CamelModel):
    """Request schema for publishing an article."""

    article: ArticleFields = Field(default_factory=ArticleFields)


class UpdateArticleRequest(CamelModel):
    """Request schema for editing an article."""

    article: ArticleFields = Field(default_factory=ArticleFields)


class NewComment(CamelModel):
    body: Optional[str] = None


class NewCommentRequest(CamelModel):
    """Request schema for commenting on an article."""

    comment: NewComment = Field(default_factory=NewComment)


# ------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------


class UserSchema(CamelModel):
    email: str
    token: str
    username: str
    bio: Optional[str] = None
    image: Optional[str] = None


class UserResponse(CamelModel):
    user: UserSchema


class ProfileSchema(CamelModel):
    username: str
    bio: Optional[str] = None
    image: Optional[str] = None
    following: bool = False


class ProfileResponse(CamelModel):
    profile: ProfileSchema


class ArticleSchema(CamelModel):
    slug: str
    title: str
    description: str
    body: str
    tag_list: list[str]
    created_at: datetime
    updated_at: datetime
    favorited: bool
    favorites_count: int
    author: ProfileSchema


class ArticleResponse(CamelModel):
    article: ArticleSchema


class MultipleArticlesResponse(CamelModel):
    articles: list[ArticleSchema]
    articles_count: int


class CommentSchema(CamelModel):
    id: int
    body: str
    created_at: datetime
    updated_at: datetime
    author: ProfileSchema


class CommentResponse(CamelModel):
    comment: CommentSchema


class MultipleCommentsResponse(CamelModel):
    comments: list[CommentSchema]


class TagsResponse(CamelModel):
    tags: list[str]


class MessageBody(CamelModel):
    body: list[str]


class MessageResponse(CamelModel):
    """Confirmation returned by delete endpoints."""

    message: MessageBody


class ErrorBody(CamelModel):
    body: list[str]


class ErrorResponse(CamelModel):
    """Standard error response returned by all error handlers."""

    errors: ErrorBody


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    database: str


# ------------------------------------------------------------------
# Entity to schema mapping
# ------------------------------------------------------------------


def user_schema(result: UserResult) -> UserSchema:
    return UserSchema(
        email=result.email,
        token=result.token,
        username=result.username,
        bio=result.bio,
        image=result.image,
    )


def profile_schema(profile: Profile) -> ProfileSchema:
    return ProfileSchema(
        username=profile.username,
        bio=profile.bio,
        image=profile.image,
        following=profile.following,
    )


def article_schema(article: Article) -> ArticleSchema:
    return ArticleSchema(
        slug=article.slug,
        title=article.title,
        description=article.description,
        body=article.body,
        tag_list=list(article.tag_list),
        created_at=article.created_at,
        updated_at=article.updated_at,
        favorited=article.favorited,
        favorites_count=article.favorites_count,
        author=profile_schema(article.author),
    )


def comment_schema(comment: Comment) -> CommentSchema:
    return CommentSchema(
        id=comment.id,
        body=comment.body,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        author=profile_schema(comment.author),
    )
