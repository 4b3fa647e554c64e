"""
FastAPI router for the content bounded context.

All routes delegate to use cases. No business logic here.
Payload shape is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from conduit.application.content.create_article import CreateArticleUseCase
from conduit.application.content.create_comment import CreateCommentUseCase
from conduit.application.content.delete_article import DeleteArticleUseCase
from conduit.application.content.delete_comment import DeleteCommentUseCase
from conduit.application.content.dtos import (
    CreateArticleCommand,
    CreateCommentCommand,
    DeleteArticleCommand,
    DeleteCommentCommand,
    FavoriteArticleCommand,
    FeedArticlesQuery,
    FollowProfileCommand,
    GetArticleQuery,
    GetProfileQuery,
    ListArticlesQuery,
    ListCommentsQuery,
    LoginUserCommand,
    RegisterUserCommand,
    UpdateArticleCommand,
    UpdateUserCommand,
)
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
from conduit.domain.content.entities import ArticlePage, Caller, ToggleDirection
from conduit.interfaces.content.dependencies import (
    get_article_use_case,
    get_caller,
    get_create_article_use_case,
    get_create_comment_use_case,
    get_current_user_use_case,
    get_delete_article_use_case,
    get_delete_comment_use_case,
    get_favorite_article_use_case,
    get_feed_articles_use_case,
    get_follow_profile_use_case,
    get_list_articles_use_case,
    get_list_comments_use_case,
    get_list_tags_use_case,
    get_login_user_use_case,
    get_profile_use_case,
    get_register_user_use_case,
    get_update_article_use_case,
    get_update_user_use_case,
)
from conduit.interfaces.content.schemas import (
    ArticleResponse,
    CommentResponse,
    ErrorResponse,
    LoginUserRequest,
    MessageBody,
    MessageResponse,
    MultipleArticlesResponse,
    MultipleCommentsResponse,
    NewArticleRequest,
    NewCommentRequest,
    NewUserRequest,
    ProfileResponse,
    TagsResponse,
    UpdateArticleRequest,
    UpdateUserRequest,
    UserResponse,
    article_schema,
    comment_schema,
    profile_schema,
    user_schema,
)
from conduit.shared.security.rate_limiting import limiter

router = APIRouter(tags=["content"])

LIMIT_QUERY = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size)
OFFSET_QUERY = Query(default=0, ge=0)
AUTH_ERRORS = {401: {"model": ErrorResponse}}
OWNED_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _page_response(page: ArticlePage) -> MultipleArticlesResponse:
    return MultipleArticlesResponse(
        articles=[article_schema(a) for a in page.articles],
        articles_count=page.count,
    )


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
    summary="Register a new user",
)
@limiter.limit(settings.rate_limit_auth)
def register_user(
    request: Request,
    payload: NewUserRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> UserResponse:
    """Create an account and return it with a session token."""
    result = use_case.execute(
        RegisterUserCommand(
            username=payload.user.username,
            email=payload.user.email,
            password=payload.user.password,
        )
    )
    return UserResponse(user=user_schema(result))


@router.post(
    "/users/login",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Sign in",
)
@limiter.limit(settings.rate_limit_auth)
def login_user(
    request: Request,
    payload: LoginUserRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
) -> UserResponse:
    """Check credentials and return the user with a session token."""
    result = use_case.execute(
        LoginUserCommand(email=payload.user.email, password=payload.user.password)
    )
    return UserResponse(user=user_schema(result))


@router.get(
    "/user",
    response_model=UserResponse,
    responses=AUTH_ERRORS,
    summary="Get the current user",
)
def current_user(
    caller: Optional[Caller] = Depends(get_caller),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
) -> UserResponse:
    return UserResponse(user=user_schema(use_case.execute(caller)))


@router.put(
    "/user",
    response_model=UserResponse,
    responses={**AUTH_ERRORS, 422: {"model": ErrorResponse}},
    summary="Update the current user",
)
def update_user(
    payload: UpdateUserRequest,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
) -> UserResponse:
    fields = payload.user
    result = use_case.execute(
        UpdateUserCommand(
            caller=caller,
            username=fields.username,
            email=fields.email,
            password=fields.password,
            bio=fields.bio,
            image=fields.image,
        )
    )
    return UserResponse(user=user_schema(result))


# ------------------------------------------------------------------
# Profiles
# ------------------------------------------------------------------


@router.get(
    "/profiles/{username}",
    response_model=ProfileResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a profile",
)
def get_profile(
    username: str,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: GetProfileUseCase = Depends(get_profile_use_case),
) -> ProfileResponse:
    profile = use_case.execute(GetProfileQuery(username=username, caller=caller))
    return ProfileResponse(profile=profile_schema(profile))


@router.api_route(
    "/profiles/{username}/follow",
    methods=["POST", "DELETE"],
    response_model=ProfileResponse,
    responses={**AUTH_ERRORS, 404: {"model": ErrorResponse}},
    summary="Follow (POST) or unfollow (DELETE) a user",
)
def follow_profile(
    request: Request,
    username: str,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: FollowProfileUseCase = Depends(get_follow_profile_use_case),
) -> ProfileResponse:
    profile = use_case.execute(
        FollowProfileCommand(
            caller=caller,
            username=username,
            direction=ToggleDirection.from_method(request.method),
        )
    )
    return ProfileResponse(profile=profile_schema(profile))


# ------------------------------------------------------------------
# Articles
# ------------------------------------------------------------------


@router.get(
    "/articles",
    response_model=MultipleArticlesResponse,
    summary="List articles",
    description="Filter by author, tag and favoriting user; most recent first.",
)
def list_articles(
    tag: Optional[str] = None,
    author: Optional[str] = None,
    favorited: Optional[str] = None,
    limit: int = LIMIT_QUERY,
    offset: int = OFFSET_QUERY,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: ListArticlesUseCase = Depends(get_list_articles_use_case),
) -> MultipleArticlesResponse:
    page = use_case.execute(
        ListArticlesQuery(
            caller=caller,
            author=author,
            tag=tag,
            favorited=favorited,
            limit=limit,
            offset=offset,
        )
    )
    return _page_response(page)


@router.get(
    "/articles/feed",
    response_model=MultipleArticlesResponse,
    responses=AUTH_ERRORS,
    summary="Articles by followed users",
)
def feed_articles(
    limit: int = LIMIT_QUERY,
    offset: int = OFFSET_QUERY,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: FeedArticlesUseCase = Depends(get_feed_articles_use_case),
) -> MultipleArticlesResponse:
    page = use_case.execute(FeedArticlesQuery(caller=caller, limit=limit, offset=offset))
    return _page_response(page)


@router.post(
    "/articles",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**AUTH_ERRORS, 422: {"model": ErrorResponse}},
    summary="Create an article",
)
def create_article(
    payload: NewArticleRequest,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: CreateArticleUseCase = Depends(get_create_article_use_case),
) -> ArticleResponse:
    fields = payload.article
    article = use_case.execute(
        CreateArticleCommand(
            caller=caller,
            title=fields.title,
            description=fields.description,
            body=fields.body,
            tag_list=fields.tag_list,
        )
    )
    return ArticleResponse(article=article_schema(article))


@router.get(
    "/articles/{slug}",
    response_model=ArticleResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an article",
)
def get_article(
    slug: str,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: GetArticleUseCase = Depends(get_article_use_case),
) -> ArticleResponse:
    article = use_case.execute(GetArticleQuery(slug=slug, caller=caller))
    return ArticleResponse(article=article_schema(article))


@router.put(
    "/articles/{slug}",
    response_model=ArticleResponse,
    responses={**OWNED_ERRORS, 422: {"model": ErrorResponse}},
    summary="Update an article",
)
def update_article(
    slug: str,
    payload: UpdateArticleRequest,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: UpdateArticleUseCase = Depends(get_update_article_use_case),
) -> ArticleResponse:
    fields = payload.article
    article = use_case.execute(
        UpdateArticleCommand(
            caller=caller,
            slug=slug,
            title=fields.title,
            description=fields.description,
            body=fields.body,
            tag_list=fields.tag_list,
        )
    )
    return ArticleResponse(article=article_schema(article))


@router.delete(
    "/articles/{slug}",
    response_model=MessageResponse,
    responses=OWNED_ERRORS,
    summary="Delete an article",
)
def delete_article(
    slug: str,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: DeleteArticleUseCase = Depends(get_delete_article_use_case),
) -> MessageResponse:
    message = use_case.execute(DeleteArticleCommand(caller=caller, slug=slug))
    return MessageResponse(message=MessageBody(body=[message]))


@router.api_route(
    "/articles/{slug}/favorite",
    methods=["POST", "DELETE"],
    response_model=ArticleResponse,
    responses={**AUTH_ERRORS, 404: {"model": ErrorResponse}},
    summary="Favorite (POST) or unfavorite (DELETE) an article",
)
def favorite_article(
    request: Request,
    slug: str,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: FavoriteArticleUseCase = Depends(get_favorite_article_use_case),
) -> ArticleResponse:
    article = use_case.execute(
        FavoriteArticleCommand(
            caller=caller,
            slug=slug,
            direction=ToggleDirection.from_method(request.method),
        )
    )
    return ArticleResponse(article=article_schema(article))


# ------------------------------------------------------------------
# Comments
# ------------------------------------------------------------------


@router.get(
    "/articles/{slug}/comments",
    response_model=MultipleCommentsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="List the comments of an article",
)
def list_comments(
    slug: str,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: ListCommentsUseCase = Depends(get_list_comments_use_case),
) -> MultipleCommentsResponse:
    comments = use_case.execute(ListCommentsQuery(slug=slug, caller=caller))
    return MultipleCommentsResponse(comments=[comment_schema(c) for c in comments])


@router.post(
    "/articles/{slug}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**AUTH_ERRORS, 404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Comment on an article",
)
def create_comment(
    slug: str,
    payload: NewCommentRequest,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: CreateCommentUseCase = Depends(get_create_comment_use_case),
) -> CommentResponse:
    comment = use_case.execute(
        CreateCommentCommand(caller=caller, slug=slug, body=payload.comment.body)
    )
    return CommentResponse(comment=comment_schema(comment))


@router.delete(
    "/articles/{slug}/comments/{comment_id}",
    response_model=MessageResponse,
    responses=OWNED_ERRORS,
    summary="Delete a comment",
)
def delete_comment(
    slug: str,
    comment_id: int,
    caller: Optional[Caller] = Depends(get_caller),
    use_case: DeleteCommentUseCase = Depends(get_delete_comment_use_case),
) -> MessageResponse:
    message = use_case.execute(
        DeleteCommentCommand(caller=caller, slug=slug, comment_id=comment_id)
    )
    return MessageResponse(message=MessageBody(body=[message]))


# ------------------------------------------------------------------
# Tags
# ------------------------------------------------------------------


@router.get("/tags", response_model=TagsResponse, summary="List tags")
def list_tags(
    use_case: ListTagsUseCase = Depends(get_list_tags_use_case),
) -> TagsResponse:
    return TagsResponse(tags=use_case.execute())
