# app/services/review_service.py
"""
Review Service Layer
Business logic for review submission and rating summaries
"""

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import review as review_crud
from app.models.notification import Notification
from app.models.review import Review
from app.models.user import User
from app.schemas.auth import SessionUser
from app.services import notification_service
from app.services.exceptions import ConflictError, NotFoundError, ServiceError
from app.utils.serializers import iso

logger = logging.getLogger(__name__)


# ======================
# REVIEW SUBMISSION
# ======================

def submit_review(
    db: Session,
    reviewer: SessionUser,
    reviewee_id: int,
    rating: int,
    review_text: Optional[str] = None
) -> Tuple[Review, Notification]:
    """
    Submit a review of another user.

    At most one review per (reviewer, reviewee) pair. The reviewee's
    notification is committed with the review.

    Raises:
        ServiceError: self-review or rating out of range
        NotFoundError: reviewee does not exist
        ConflictError: the pair already has a review
    """
    if reviewee_id == reviewer.id:
        raise ServiceError("You cannot review yourself")

    if not (1 <= rating <= 5):
        raise ServiceError("Rating must be between 1 and 5")

    reviewee = db.query(User).filter(User.id == reviewee_id).first()
    if not reviewee:
        raise NotFoundError("User not found")

    if review_crud.get_review_for_pair(db, reviewer.id, reviewee_id):
        raise ConflictError("You have already reviewed this user")

    try:
        review = review_crud.create_review(
            db=db,
            reviewer_id=reviewer.id,
            reviewee_id=reviewee_id,
            rating=rating,
            review_text=review_text
        )

        notification = notification_service.create_notification(
            db,
            user_id=reviewee_id,
            notification_type="review",
            title="New review",
            message=f"You received a {rating}-star review",
            link=f"/user/{reviewer.id}",
        )

        db.commit()
    except IntegrityError:
        # Concurrent duplicate caught by the unique constraint
        db.rollback()
        raise ConflictError("You have already reviewed this user")
    except Exception:
        db.rollback()
        raise

    logger.info("User %s reviewed user %s (%s stars)", reviewer.id, reviewee_id, rating)
    return review, notification


# ======================
# REVIEW RETRIEVAL
# ======================

def get_user_reviews(
    db: Session,
    reviewee_id: int,
    limit: int = 50,
    offset: int = 0
) -> Dict[str, Any]:
    """
    Reviews received by a user plus the rating aggregate.

    Returns:
        Dictionary with reviews, averageRating and reviewCount
    """
    reviews = review_crud.get_reviews_for_user(db, reviewee_id, limit=limit, offset=offset)
    average, count = review_crud.get_rating_summary(db, reviewee_id)

    return {
        "reviews": [
            {
                "id": r.id,
                "rating": r.rating,
                "reviewText": r.review_text,
                "createdAt": iso(r.created_at),
                "reviewer": {
                    "id": r.reviewer.id,
                    "name": r.reviewer.name,
                    "profileImageUrl": r.reviewer.profile_image_url,
                } if r.reviewer else None,
            }
            for r in reviews
        ],
        "averageRating": average,
        "reviewCount": count,
    }
