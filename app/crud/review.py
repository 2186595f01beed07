# app/crud/review.py
"""
Review CRUD Operations
Core database operations for ratings and reviews
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.review import Review


# ======================
# REVIEW CRUD
# ======================

def create_review(
    db: Session,
    reviewer_id: int,
    reviewee_id: int,
    rating: int,
    review_text: Optional[str] = None
) -> Review:
    """
    Create a new review.

    Args:
        db: Database session
        reviewer_id: Author user ID
        reviewee_id: Reviewed user ID
        rating: Rating value (1-5)
        review_text: Optional text

    Returns:
        Created Review object

    Raises:
        ValueError: If rating is out of range
    """
    if not (1 <= rating <= 5):
        raise ValueError("Rating must be between 1 and 5")

    review = Review(
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
        rating=rating,
        review_text=review_text
    )

    db.add(review)
    db.flush()
    return review


def get_review_for_pair(db: Session, reviewer_id: int, reviewee_id: int) -> Optional[Review]:
    """Return the reviewer's review of the reviewee, if any."""
    return db.query(Review).filter(
        Review.reviewer_id == reviewer_id,
        Review.reviewee_id == reviewee_id,
    ).first()


def get_reviews_for_user(
    db: Session,
    reviewee_id: int,
    limit: int = 50,
    offset: int = 0
) -> List[Review]:
    """
    Get reviews received by a user, newest first.

    Args:
        db: Database session
        reviewee_id: Reviewed user ID
        limit: Maximum reviews to return
        offset: Number of reviews to skip

    Returns:
        List of Review objects
    """
    return (
        db.query(Review)
        .filter(Review.reviewee_id == reviewee_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def get_rating_summary(db: Session, reviewee_id: int) -> Tuple[float, int]:
    """
    Average rating (half-up rounded to one decimal) and review count.
    A user without reviews averages 0.0.
    """
    total, count = db.query(
        func.coalesce(func.sum(Review.rating), 0),
        func.count(Review.id),
    ).filter(Review.reviewee_id == reviewee_id).one()

    if not count:
        return 0.0, 0

    average = (Decimal(int(total)) / Decimal(int(count))).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )
    return float(average), int(count)
