"""Permission gate for discussion content.

Pure functions over the acting user's identity and role. No I/O; callers
load the resource first and raise ForbiddenError on a False answer.
"""

from discuss.domain.value import Role, UserId


def can_edit_or_delete(
    resource_owner_id: UserId, acting_user_id: UserId, acting_role: Role
) -> bool:
    """Owners edit their own replies; admins and authors moderate any."""
    return resource_owner_id == acting_user_id or acting_role.is_moderator


def can_close(post_owner_id: UserId, acting_user_id: UserId) -> bool:
    """Only the post owner closes a post. Role grants no override."""
    return post_owner_id == acting_user_id


def can_pin(acting_role: Role) -> bool:
    return acting_role == Role.ADMIN


def can_reopen(
    post_owner_id: UserId, acting_user_id: UserId, acting_role: Role
) -> bool:
    """The owner or an admin may reopen a closed post."""
    return post_owner_id == acting_user_id or acting_role == Role.ADMIN


def can_delete_post(
    post_owner_id: UserId, acting_user_id: UserId, acting_role: Role
) -> bool:
    return post_owner_id == acting_user_id or acting_role == Role.ADMIN


def can_unmark_solved(acting_role: Role) -> bool:
    return acting_role.is_moderator
