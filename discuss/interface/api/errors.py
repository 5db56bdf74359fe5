"""Mapping from domain errors to HTTP responses."""

import logfire
from fastapi import HTTPException, status

from discuss.domain.error import (
    AlreadyClosedError,
    AlreadyVotedError,
    DomainError,
    ForbiddenError,
    ForumInactiveError,
    NotClosedError,
    NotFoundError,
    PostClosedError,
    UnavailableError,
    ValidationFailedError,
)
from discuss.domain.service import JWTService
from discuss.util.jwt import TokenPayload

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationFailedError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForumInactiveError, status.HTTP_409_CONFLICT),
    (PostClosedError, status.HTTP_409_CONFLICT),
    (AlreadyClosedError, status.HTTP_409_CONFLICT),
    (NotClosedError, status.HTTP_409_CONFLICT),
    (AlreadyVotedError, status.HTTP_409_CONFLICT),
    (UnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException.

    Unavailable errors carry a Retry-After header since they are the only
    kind a client may retry.
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        logfire.error("Persistence unavailable", error=str(error))
        return HTTPException(
            status_code=status_code, detail=str(error), headers={"Retry-After": "1"}
        )

    logfire.warn(
        "Request rejected",
        error_type=type(error).__name__,
        status_code=status_code,
        error=str(error),
    )
    return HTTPException(status_code=status_code, detail=str(error))


def bad_request(error: ValueError) -> HTTPException:
    """Malformed identifiers or out-of-range parameters."""
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def require_auth(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> TokenPayload:
    """Return the token payload or raise 401.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        action: What the caller tried to do, used in the error detail

    Raises:
        HTTPException: If the token is missing or invalid
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return payload
