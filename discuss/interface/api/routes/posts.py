"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from discuss.application.usecase.post import (
    ChangePostStateRequest,
    ChangePostStateUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    PostAction,
    PostItem,
)
from discuss.domain.error import DomainError
from discuss.domain.service import JWTService
from discuss.interface.api.errors import bad_request, require_auth, to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


async def _transition(
    post_id: str,
    action: PostAction,
    use_case: ChangePostStateUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> PostItem:
    payload = require_auth(jwt_service, auth_token, f"{action.value} posts")
    try:
        request = ChangePostStateRequest(
            post_id=post_id,
            action=action,
            user_id=payload.user_id,
            role=payload.role,
        )
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Get a post and count the view.

    If authenticated, includes the reader's vote state.
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    try:
        request = GetPostRequest(
            post_id=post_id, user_id=payload.user_id if payload else None
        )
        return await get_post_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.post("/{post_id}/pin", response_model=PostItem)
async def pin_post(
    post_id: str,
    change_post_state_use_case: FromDishka[ChangePostStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Pin a post to the top of its forum.

    Admin only.

    Raises:
        HTTPException: 403 if the actor is not an admin, 404 if post not found
    """
    return await _transition(
        post_id, PostAction.PIN, change_post_state_use_case, jwt_service, auth_token
    )


@router.delete("/{post_id}/pin", response_model=PostItem)
async def unpin_post(
    post_id: str,
    change_post_state_use_case: FromDishka[ChangePostStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Unpin a post. Admin only."""
    return await _transition(
        post_id, PostAction.UNPIN, change_post_state_use_case, jwt_service, auth_token
    )


@router.post("/{post_id}/solve", response_model=PostItem)
async def mark_post_solved(
    post_id: str,
    change_post_state_use_case: FromDishka[ChangePostStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Mark a post as solved.

    Any authenticated user can do this.
    """
    return await _transition(
        post_id, PostAction.SOLVE, change_post_state_use_case, jwt_service, auth_token
    )


@router.delete("/{post_id}/solve", response_model=PostItem)
async def unmark_post_solved(
    post_id: str,
    change_post_state_use_case: FromDishka[ChangePostStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Clear the solved flag. Admins and authors only."""
    return await _transition(
        post_id,
        PostAction.UNSOLVE,
        change_post_state_use_case,
        jwt_service,
        auth_token,
    )


@router.post("/{post_id}/close", response_model=PostItem)
async def close_post(
    post_id: str,
    change_post_state_use_case: FromDishka[ChangePostStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Close a post to new replies.

    Only the post owner can close it, whatever their role.

    Args:
        post_id: Post UUID
        change_post_state_use_case: Change post state use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The closed post

    Raises:
        HTTPException: 403 if not the owner, 409 if already closed
    """
    return await _transition(
        post_id, PostAction.CLOSE, change_post_state_use_case, jwt_service, auth_token
    )


@router.post("/{post_id}/reopen", response_model=PostItem)
async def reopen_post(
    post_id: str,
    change_post_state_use_case: FromDishka[ChangePostStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Reopen a closed post. Owner or admin.

    Raises:
        HTTPException: 403 if neither owner nor admin, 409 if not closed
    """
    return await _transition(
        post_id,
        PostAction.REOPEN,
        change_post_state_use_case,
        jwt_service,
        auth_token,
    )


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post with its replies and votes.

    Only the post owner or an admin can delete.
    """
    payload = require_auth(jwt_service, auth_token, "delete posts")

    try:
        request = DeletePostRequest(
            post_id=post_id, user_id=payload.user_id, role=payload.role
        )
        return await delete_post_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
