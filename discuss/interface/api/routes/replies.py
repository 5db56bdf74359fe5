"""Reply routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from discuss.application.usecase.reply import (
    CreateReplyRequest,
    CreateReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
    GetReplyTreeRequest,
    GetReplyTreeResponse,
    GetReplyTreeUseCase,
    ReplyItem,
    UpdateReplyRequest,
    UpdateReplyUseCase,
)
from discuss.domain.error import DomainError
from discuss.domain.service import JWTService
from discuss.interface.api.errors import bad_request, require_auth, to_http_exception

router = APIRouter(tags=["replies"], route_class=DishkaRoute)


class CreateReplyAPIRequest(BaseModel):
    """API request for creating a reply."""

    body: str = Field(min_length=1)
    parent_id: str | None = None  # Parent reply ID for nested replies


class UpdateReplyAPIRequest(BaseModel):
    """API request for editing a reply."""

    body: str = Field(min_length=1)


@router.post(
    "/posts/{post_id}/replies",
    response_model=ReplyItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    post_id: str,
    request: CreateReplyAPIRequest,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    idempotency_key: str | None = Header(default=None),
) -> ReplyItem:
    """Reply to a post or to another reply.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Reply creation data
        create_reply_use_case: Create reply use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        idempotency_key: Client key for safe retries (optional)

    Returns:
        Created reply details

    Raises:
        HTTPException: If not authenticated, post closed, parent missing
            or on another post
    """
    payload = require_auth(jwt_service, auth_token, "reply")

    try:
        use_case_request = CreateReplyRequest(
            post_id=post_id,
            body=request.body,
            author_id=payload.user_id,
            parent_id=request.parent_id,
            idempotency_key=idempotency_key,
        )
        return await create_reply_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/posts/{post_id}/replies", response_model=GetReplyTreeResponse)
async def get_reply_tree(
    post_id: str,
    get_reply_tree_use_case: FromDishka[GetReplyTreeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetReplyTreeResponse:
    """Get the replies of a post as a nested tree.

    If authenticated, includes vote state for each reply.
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    try:
        request = GetReplyTreeRequest(
            post_id=post_id, user_id=payload.user_id if payload else None
        )
        return await get_reply_tree_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.patch("/replies/{reply_id}", response_model=ReplyItem)
async def update_reply(
    reply_id: str,
    request: UpdateReplyAPIRequest,
    update_reply_use_case: FromDishka[UpdateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReplyItem:
    """Edit a reply's body.

    Only the reply author or a moderator can edit.
    """
    payload = require_auth(jwt_service, auth_token, "edit replies")

    try:
        use_case_request = UpdateReplyRequest(
            reply_id=reply_id,
            body=request.body,
            user_id=payload.user_id,
            role=payload.role,
        )
        return await update_reply_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.delete("/replies/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    reply_id: str,
    delete_reply_use_case: FromDishka[DeleteReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteReplyResponse:
    """Delete a reply and everything nested under it.

    Only the reply author or a moderator can delete.
    """
    payload = require_auth(jwt_service, auth_token, "delete replies")

    try:
        use_case_request = DeleteReplyRequest(
            reply_id=reply_id, user_id=payload.user_id, role=payload.role
        )
        return await delete_reply_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
