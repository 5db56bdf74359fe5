"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from discuss.domain.model import DiscussionPost, Forum, Reply, User, Vote
from discuss.domain.value import (
    ForumId,
    LocalizedText,
    PostId,
    ReplyId,
    Role,
    Slug,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        display_name=row["display_name"],
        avatar_url=row.get("avatar_url"),
        role=Role(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_forum(row: Dict[str, Any]) -> Forum:
    """Convert database row to Forum domain model.

    Localized columns (name_az/name_ru, description_az/description_ru) are
    folded into LocalizedText values.
    """
    description = None
    if row.get("description_az") or row.get("description_ru"):
        description = LocalizedText(
            az=row.get("description_az") or "",
            ru=row.get("description_ru") or "",
        )

    return Forum(
        id=ForumId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        name=LocalizedText(az=row["name_az"], ru=row.get("name_ru") or ""),
        description=description,
        icon=row.get("icon"),
        color=row.get("color"),
        is_active=row["is_active"],
        order=row["display_order"],
        post_count=row["post_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def forum_to_dict(forum: Forum) -> Dict[str, Any]:
    """Convert Forum domain model to database dict.

    Args:
        forum: Forum domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": forum.id,
        "slug": forum.slug.root,
        "name_az": forum.name.az,
        "name_ru": forum.name.ru,
        "description_az": forum.description.az if forum.description else None,
        "description_ru": forum.description.ru if forum.description else None,
        "icon": forum.icon,
        "color": forum.color,
        "is_active": forum.is_active,
        "display_order": forum.order,
        "post_count": forum.post_count,
        "created_at": forum.created_at,
        "updated_at": forum.updated_at,
    }


def row_to_post(row: Dict[str, Any]) -> DiscussionPost:
    """Convert database row to DiscussionPost domain model.

    Args:
        row: Database row as dict

    Returns:
        DiscussionPost domain model
    """
    return DiscussionPost(
        id=PostId(_uuid(row["id"])),
        forum_id=ForumId(_uuid(row["forum_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        body=row["body"],
        pinned=row["pinned"],
        solved=row["solved"],
        closed=row["closed"],
        view_count=row["view_count"],
        upvote_count=row["upvote_count"],
        downvote_count=row["downvote_count"],
        reply_count=row["reply_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_reply_at=row.get("last_reply_at"),
    )


def post_to_dict(post: DiscussionPost) -> Dict[str, Any]:
    return post.model_dump()


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model.

    Args:
        row: Database row as dict

    Returns:
        Reply domain model
    """
    parent_id = row.get("parent_id")
    return Reply(
        id=ReplyId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_id=ReplyId(_uuid(parent_id)) if parent_id else None,
        depth=row["depth"],
        body=row["body"],
        is_helpful=row["is_helpful"],
        upvote_count=row["upvote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    return reply.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Enum columns take their string values.
    """
    data = vote.model_dump()
    data["votable_type"] = vote.votable_type.value
    data["vote_type"] = vote.vote_type.value
    return data
