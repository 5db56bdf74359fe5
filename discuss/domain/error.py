"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationFailedError(DomainError):
    """Empty or otherwise invalid input."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForumInactiveError(DomainError):
    """Raised when posting into a forum that is not active."""

    def __init__(self, forum_id: str):
        self.forum_id = forum_id
        super().__init__(f"Forum {forum_id} is not active")


class ForbiddenError(DomainError):
    """Raised when the permission gate rejects an action."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class PostClosedError(DomainError):
    """Raised when replying to a closed post."""

    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} is closed")


class AlreadyClosedError(DomainError):
    """Raised when closing a post that is already closed."""

    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} is already closed")


class NotClosedError(DomainError):
    """Raised when reopening a post that is not closed."""

    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} is not closed")


class AlreadyVotedError(DomainError):
    """Raised when a user votes twice on the same item."""

    def __init__(self, votable_type: str, votable_id: str):
        super().__init__(f"Already voted on this {votable_type}: {votable_id}")


class UnavailableError(DomainError):
    """The persistence service timed out or could not be reached.

    The only error kind that callers may retry.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        super().__init__(f"{operation} unavailable: {reason}")
