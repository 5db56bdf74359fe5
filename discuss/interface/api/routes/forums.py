"""Forum routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from discuss.application.usecase.forum import (
    ForumItem,
    GetForumRequest,
    GetForumUseCase,
    ListForumsRequest,
    ListForumsResponse,
    ListForumsUseCase,
)
from discuss.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
)
from discuss.domain.error import DomainError
from discuss.domain.service import JWTService
from discuss.interface.api.errors import bad_request, require_auth, to_http_exception

router = APIRouter(prefix="/forums", tags=["forums"], route_class=DishkaRoute)


@router.get("", response_model=ListForumsResponse)
async def list_forums(
    list_forums_use_case: FromDishka[ListForumsUseCase],
    active_only: bool = Query(default=True),
) -> ListForumsResponse:
    """List forums in display order with their post counts."""
    try:
        return await list_forums_use_case.execute(
            ListForumsRequest(active_only=active_only)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{slug}", response_model=ForumItem)
async def get_forum(
    slug: str,
    get_forum_use_case: FromDishka[GetForumUseCase],
) -> ForumItem:
    """Get a single forum by slug.

    Raises:
        HTTPException: 404 if no forum has this slug
    """
    try:
        return await get_forum_use_case.execute(GetForumRequest(slug=slug))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{slug}/posts", response_model=ListPostsResponse)
async def list_forum_posts(
    slug: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int | None = Query(default=None),
    offset: int = Query(default=0),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List a forum's posts, pinned first, then newest first.

    If authenticated, includes vote state for each post.

    Args:
        slug: Forum slug
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        limit: Page size (1-100, defaults to the configured page size)
        offset: Number of posts to skip
        auth_token: JWT token from cookie (optional)

    Returns:
        The forum header and one page of posts
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    try:
        request = ListPostsRequest(
            slug=slug,
            limit=limit,
            offset=offset,
            user_id=payload.user_id if payload else None,
        )
        return await list_posts_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1)
    body: str = Field(min_length=1)


@router.post(
    "/{forum_id}/posts",
    response_model=PostItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    forum_id: str,
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    idempotency_key: str | None = Header(default=None),
) -> PostItem:
    """Create a post in a forum.

    Requires authentication. Sending the same Idempotency-Key header again
    returns the post created by the first request.

    Args:
        forum_id: Forum UUID
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        idempotency_key: Client key for safe retries (optional)

    Returns:
        Created post details

    Raises:
        HTTPException: If not authenticated, forum missing or inactive,
            or validation fails
    """
    payload = require_auth(jwt_service, auth_token, "create posts")

    try:
        use_case_request = CreatePostRequest(
            forum_id=forum_id,
            title=request.title,
            body=request.body,
            author_id=payload.user_id,
            idempotency_key=idempotency_key,
        )
        return await create_post_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
