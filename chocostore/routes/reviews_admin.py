from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.review import Review
from chocostore.schemas.review_schemas import ReviewApprovalUpdate
from chocostore.utils.clock import utcnow
from chocostore.utils.pagination import paginate

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def list_reviews(
    page: int = 1,
    limit: int = 10,
    is_approved: Optional[bool] = None,
    session: Session = Depends(get_session),
):
    query = select(Review)

    if is_approved is not None:
        query = query.where(Review.is_approved == is_approved)

    return paginate(
        session=session,
        query=query.order_by(Review.created_at.desc(), Review.id.desc()),
        page=page,
        limit=limit,
    )


@router.patch("/{review_id}/approval")
def toggle_approval(
    review_id: int,
    data: Optional[ReviewApprovalUpdate] = None,
    session: Session = Depends(get_session),
):
    """Set approval explicitly, or flip it when no value is sent."""
    review = session.get(Review, review_id)
    if not review:
        raise HTTPException(404, "Review not found")

    if data is not None and data.is_approved is not None:
        review.is_approved = data.is_approved
    else:
        review.is_approved = not review.is_approved

    review.updated_at = utcnow()
    session.add(review)
    session.commit()
    session.refresh(review)

    return {"review_id": review.id, "is_approved": review.is_approved}


@router.delete("/{review_id}")
def delete_review(review_id: int, session: Session = Depends(get_session)):
    review = session.get(Review, review_id)
    if not review:
        raise HTTPException(404, "Review not found")

    session.delete(review)
    session.commit()

    return {"message": "Review deleted"}
