"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status

from discuss.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    RetractVoteRequest,
    RetractVoteResponse,
    RetractVoteUseCase,
)
from discuss.domain.error import DomainError
from discuss.domain.service import JWTService
from discuss.domain.value import VotableType
from discuss.interface.api.errors import bad_request, require_auth, to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


async def _cast(
    votable_type: VotableType,
    votable_id: str,
    use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> CastVoteResponse:
    payload = require_auth(jwt_service, auth_token, "vote")
    try:
        request = CastVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            user_id=payload.user_id,
        )
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


async def _retract(
    votable_type: VotableType,
    votable_id: str,
    use_case: RetractVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> RetractVoteResponse:
    payload = require_auth(jwt_service, auth_token, "remove votes")
    try:
        request = RetractVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            user_id=payload.user_id,
        )
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.post(
    "/posts/{post_id}/vote",
    response_model=CastVoteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upvote_post(
    post_id: str,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Upvote a post.

    Requires authentication.

    Raises:
        HTTPException: If not authenticated, already voted, or post not found
    """
    return await _cast(
        VotableType.POST, post_id, cast_vote_use_case, jwt_service, auth_token
    )


@router.delete("/posts/{post_id}/vote", response_model=RetractVoteResponse)
async def remove_vote_from_post(
    post_id: str,
    retract_vote_use_case: FromDishka[RetractVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RetractVoteResponse:
    """Remove vote from a post."""
    return await _retract(
        VotableType.POST, post_id, retract_vote_use_case, jwt_service, auth_token
    )


@router.post(
    "/replies/{reply_id}/vote",
    response_model=CastVoteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upvote_reply(
    reply_id: str,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Upvote a reply.

    Requires authentication.
    """
    return await _cast(
        VotableType.REPLY, reply_id, cast_vote_use_case, jwt_service, auth_token
    )


@router.delete("/replies/{reply_id}/vote", response_model=RetractVoteResponse)
async def remove_vote_from_reply(
    reply_id: str,
    retract_vote_use_case: FromDishka[RetractVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RetractVoteResponse:
    """Remove vote from a reply."""
    return await _retract(
        VotableType.REPLY, reply_id, retract_vote_use_case, jwt_service, auth_token
    )
