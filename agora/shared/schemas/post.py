"""
Post Schemas

Output shapes for posts, likes and comments.

Counts are aggregates computed in SQL (like_count, comment_count); the
like and comment collections themselves are never loaded for a feed.

Example (wire format):
======================
    {
        "id": "7d1f0c2e-...",
        "content": "First light over the harbour",
        "image": null,
        "createdAt": "2024-01-15T06:12:44.120331Z",
        "authorId": "550e8400-...",
        "author": {"id": "550e8400-...", "name": "Jane", "username": "jane", "image": null},
        "likeCount": 3,
        "commentCount": 1,
        "hasLiked": true
    }
"""

from datetime import datetime
from typing import Optional

from agora.shared.schemas.common import AuthorSummary, BaseSchema


class PostWithDetails(BaseSchema):
    """A post with its author, aggregate counts and the viewer's like state."""

    id: str
    content: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    author_id: str
    author: AuthorSummary
    like_count: int = 0
    comment_count: int = 0
    has_liked: bool = False


class LikeResult(BaseSchema):
    """State after a like toggle; like_count is read after commit."""

    liked: bool
    like_count: int


class CommentWithAuthor(BaseSchema):
    """A comment with its author."""

    id: str
    content: str
    post_id: str
    created_at: datetime
    author: AuthorSummary


class DeletedPost(BaseSchema):
    """Acknowledgement of a post deletion."""

    id: str
    deleted: bool = True
