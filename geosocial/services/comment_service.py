from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc
import logging

from geosocial.models.comment import Comment
from geosocial.models.user import User
from geosocial.schemas.comment_schema import CommentCreate, CommentResponse, CommentWithUser
from geosocial.schemas.user_schema import UserResponse

logger = logging.getLogger(__name__)

class CommentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_comment(self, user_id: str, comment_data: CommentCreate) -> Comment:
        """Create a new comment on a post or video"""
        comment = Comment(
            user_id=user_id,
            post_id=comment_data.post_id,
            video_id=comment_data.video_id,
            text=comment_data.text,
        )

        self.db.add(comment)
        await self.db.commit()
        await self.db.refresh(comment)

        logger.info(f"Created comment {comment.id} by user {user_id}")
        return comment

    async def get_post_comments(self, post_id: str) -> List[CommentWithUser]:
        """Comments on a post, newest first"""
        return await self._get_comments(Comment.post_id == post_id)

    async def get_video_comments(self, video_id: str) -> List[CommentWithUser]:
        """Comments on a video, newest first"""
        return await self._get_comments(Comment.video_id == video_id)

    async def get_all_comments(self) -> List[CommentWithUser]:
        """Every comment, for moderation"""
        return await self._get_comments()

    async def delete_comment(self, comment_id: str, user_id: str) -> bool:
        stmt = delete(Comment).where(
            Comment.id == comment_id,
            Comment.user_id == user_id
        )
        return await self._delete(stmt, comment_id)

    async def delete_comment_admin(self, comment_id: str) -> bool:
        stmt = delete(Comment).where(Comment.id == comment_id)
        return await self._delete(stmt, comment_id)

    async def _delete(self, stmt, comment_id: str) -> bool:
        result = await self.db.execute(stmt)
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted comment {comment_id}")
        return deleted

    async def _get_comments(self, *conditions) -> List[CommentWithUser]:
        stmt = select(Comment, User).outerjoin(
            User, Comment.user_id == User.id
        ).where(
            *conditions
        ).order_by(
            desc(Comment.created_at), desc(Comment.id)
        )
        result = await self.db.execute(stmt)

        comments = []
        for comment, user in result.all():
            if user is None:
                logger.warning(f"Skipping comment {comment.id}: author {comment.user_id} not found")
                continue

            comments.append(CommentWithUser(
                **CommentResponse.model_validate(comment).model_dump(),
                user=UserResponse.model_validate(user),
            ))

        return comments
