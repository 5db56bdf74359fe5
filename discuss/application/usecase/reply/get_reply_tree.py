"""Get reply tree use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import ReplyNode, ReplyService, VoteService
from discuss.domain.value import PostId, UserId, VotableType

from .create_reply import ReplyItem


class ReplyTreeItem(ReplyItem):
    """Reply with its rendered position and children."""

    tree_depth: int
    can_reply: bool
    has_voted: bool
    children: list["ReplyTreeItem"]


class GetReplyTreeRequest(BaseModel):
    """Get reply tree request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetReplyTreeResponse(BaseModel):
    """Get reply tree response."""

    post_id: str
    replies: list[ReplyTreeItem]
    total: int


class GetReplyTreeUseCase:
    """Use case for rendering all replies of a post as a tree."""

    def __init__(self, reply_service: ReplyService, vote_service: VoteService) -> None:
        """Initialize get reply tree use case.

        Args:
            reply_service: Reply domain service
            vote_service: Vote service for the reader's vote state
        """
        self.reply_service = reply_service
        self.vote_service = vote_service

    async def execute(self, request: GetReplyTreeRequest) -> GetReplyTreeResponse:
        """Execute get reply tree flow.

        Raises:
            NotFoundError: If post not found
        """
        roots = await self.reply_service.load_tree(PostId(UUID(request.post_id)))

        nodes: list[ReplyNode] = []
        pending = list(roots)
        while pending:
            node = pending.pop()
            nodes.append(node)
            pending.extend(node.children)

        # Batch query for all votes of the reader
        voted: dict = {}
        if request.user_id and nodes:
            voted = await self.vote_service.has_voted_many(
                UserId(UUID(request.user_id)),
                [node.reply.id for node in nodes],
                VotableType.REPLY,
            )

        def to_item(node: ReplyNode) -> ReplyTreeItem:
            base = ReplyItem.from_reply(node.reply, node.author)
            return ReplyTreeItem(
                **base.model_dump(),
                tree_depth=node.depth,
                can_reply=node.can_reply,
                has_voted=voted.get(node.reply.id, False),
                children=[to_item(child) for child in node.children],
            )

        return GetReplyTreeResponse(
            post_id=request.post_id,
            replies=[to_item(root) for root in roots],
            total=len(nodes),
        )
