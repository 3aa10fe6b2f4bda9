from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
from .exceptions import (
    ServiceError,
    NotFoundError,
    PermissionDeniedError,
    BusinessRuleViolationError,
    ValidationFailedError,
)
from .session_service import SessionService
from ..models.comment import Comment
from ..models.profile import Profile
from ..schemas.comment import CommentNode
from ..schemas.profile import ProfileSummary
from ..utils.comment_tree import build_comment_tree
from ..utils.constants import SquadConstants
from ..utils.date_helpers import DateHelpers
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)


class CommentServiceError(ServiceError):
    """Base exception for comment service errors"""

    pass


class CommentNotFoundError(NotFoundError, CommentServiceError):
    """Comment not found"""

    pass


class CommentService:
    def __init__(self, db: Session):
        self.db = db
        self.session_service = SessionService(db)

    def list_comments(self, session_id: str) -> List[CommentNode]:
        """Comments for a session as a reply tree, oldest first at each level"""

        self.session_service.get_session_or_raise(session_id)

        comments = (
            self.db.query(Comment)
            .filter(Comment.session_id == session_id)
            .order_by(Comment.created_at)
            .all()
        )

        tree = build_comment_tree([self._to_dict(comment) for comment in comments])
        return [CommentNode.model_validate(node) for node in tree]

    def create_comment(
        self,
        session_id: str,
        user: Profile,
        content: str,
        parent_comment_id: Optional[str] = None,
    ) -> CommentNode:
        self.session_service.get_session_or_raise(session_id)

        content = ValidationHelpers.sanitize_comment(content)
        if not content:
            raise ValidationFailedError(
                details={"content": ["Comment content is required"]}
            )

        if parent_comment_id:
            parent = (
                self.db.query(Comment).filter(Comment.id == parent_comment_id).first()
            )
            if not parent or parent.session_id != session_id:
                raise BusinessRuleViolationError(
                    "Parent comment not found or belongs to different session"
                )

        try:
            comment = Comment(
                content=content,
                session_id=session_id,
                user_id=user.id,
                parent_comment_id=parent_comment_id,
            )
            self.db.add(comment)
            self.db.commit()
            self.db.refresh(comment)

        except Exception as e:
            self.db.rollback()
            raise CommentServiceError(f"Failed to create comment: {str(e)}")

        return CommentNode.model_validate(self._to_dict(comment))

    def update_comment(
        self,
        session_id: str,
        comment_id: str,
        user: Profile,
        content: str,
        now: Optional[datetime] = None,
    ) -> CommentNode:
        """Authors may edit their own comment within the edit window"""

        comment = self._get_comment_or_raise(session_id, comment_id)

        if comment.user_id != user.id:
            raise PermissionDeniedError("You can only edit your own comments")

        if not DateHelpers.is_within_edit_window(comment.created_at, now):
            raise BusinessRuleViolationError(
                f"Comment is too old to edit ({SquadConstants.COMMENT_EDIT_WINDOW_HOURS} hour limit)"
            )

        content = ValidationHelpers.sanitize_comment(content)
        if not content:
            raise ValidationFailedError(
                details={"content": ["Comment content is required"]}
            )

        try:
            comment.content = content
            comment.updated_at = DateHelpers.utcnow()
            self.db.commit()
            self.db.refresh(comment)

        except Exception as e:
            self.db.rollback()
            raise CommentServiceError(f"Failed to update comment: {str(e)}")

        return CommentNode.model_validate(self._to_dict(comment))

    def delete_comment(self, session_id: str, comment_id: str, user: Profile) -> bool:
        """Author, the session creator (moderation) or a super admin may delete"""

        comment = self._get_comment_or_raise(session_id, comment_id)
        session = comment.session

        can_delete = (
            comment.user_id == user.id
            or session.created_by == user.id
            or user.is_super_admin
        )
        if not can_delete:
            raise PermissionDeniedError(
                "You can only delete your own comments or moderate comments on your sessions"
            )

        try:
            # Replies cascade with the parent
            self.db.delete(comment)
            self.db.commit()

        except Exception as e:
            self.db.rollback()
            raise CommentServiceError(f"Failed to delete comment: {str(e)}")

        logger.info(f"Comment {comment_id} on session {session_id} deleted by {user.id}")
        return True

    def _get_comment_or_raise(self, session_id: str, comment_id: str) -> Comment:
        comment = (
            self.db.query(Comment)
            .filter(Comment.id == comment_id, Comment.session_id == session_id)
            .first()
        )
        if not comment:
            raise CommentNotFoundError("Comment not found")
        return comment

    @staticmethod
    def _to_dict(comment: Comment) -> Dict[str, Any]:
        author = comment.user
        return {
            "id": comment.id,
            "content": comment.content,
            "session_id": comment.session_id,
            "user_id": comment.user_id,
            "parent_comment_id": comment.parent_comment_id,
            "created_at": DateHelpers.ensure_aware(comment.created_at),
            "updated_at": DateHelpers.ensure_aware(comment.updated_at),
            "user": ProfileSummary(id=author.id, name=author.name) if author else None,
        }
