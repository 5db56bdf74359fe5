"""Strongly typed identifiers for discussion entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID, uuid5

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
ForumId = NewType("ForumId", UUID)
PostId = NewType("PostId", UUID)
ReplyId = NewType("ReplyId", UUID)
VoteId = NewType("VoteId", UUID)

# Namespace for ids derived from client idempotency keys
IDEMPOTENCY_NAMESPACE = UUID("5b0c6f0e-2d8a-4c1e-9a57-3f1d2b7c9e41")


def derive_id(kind: str, author_id: UserId, idempotency_key: str) -> UUID:
    """Derive a stable entity id from a client idempotency key.

    The same (kind, author, key) always yields the same id, so a retried
    create collides with the first insert on the primary key.
    """
    return uuid5(IDEMPOTENCY_NAMESPACE, f"{kind}:{author_id}:{idempotency_key}")
