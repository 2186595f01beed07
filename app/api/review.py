# app/api/review.py
"""
Review & Rating API Router

Endpoints:
- GET /api/reviews?userId= - Reviews received by a user with average rating
- POST /api/reviews - Submit a review of another user
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.review import ReviewCreate
from app.services import notification_service, review_service
from app.services.exceptions import ServiceError
from app.utils.security import get_current_user
from app.utils.serializers import iso

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


# ======================
# LIST REVIEWS
# ======================
@router.get("")
def get_reviews(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """
    Public listing of the reviews a user received.

    Returns:
        reviews (newest first), averageRating rounded to one decimal
        (0.0 when there are none) and reviewCount
    """
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID is required"
        )
    return review_service.get_user_reviews(db, user_id)


# ======================
# SUBMIT REVIEW
# ======================
@router.post("", status_code=status.HTTP_201_CREATED)
def submit_review(
    review: ReviewCreate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Submit a review of another user.

    Requirements:
    - Cannot review yourself
    - Only one review per reviewer/reviewee pair
    - Rating must be 1-5
    - Review text max 1000 characters
    """
    try:
        new_review, notification = review_service.submit_review(
            db=db,
            reviewer=current_user,
            reviewee_id=review.reviewee_id,
            rating=review.rating,
            review_text=review.review_text
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    notification_service.dispatch_email_for_notification(db, notification)
    return {
        "success": True,
        "review": {
            "id": new_review.id,
            "reviewerId": new_review.reviewer_id,
            "revieweeId": new_review.reviewee_id,
            "rating": new_review.rating,
            "reviewText": new_review.review_text,
            "createdAt": iso(new_review.created_at),
        },
    }
