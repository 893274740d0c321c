from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.models.review import Review
from chocostore.schemas.review_schemas import ReviewCreate, ReviewRead


router = APIRouter()


# ---------------------------------------------------------
# CREATE A REVIEW (waits for admin approval)
# ---------------------------------------------------------

@router.post("", status_code=201)
def create_review(
    data: ReviewCreate,
    session: Session = Depends(get_session)
):
    review = Review(
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        rating=data.rating,
        review_text=data.review_text,
    )

    session.add(review)
    session.commit()
    session.refresh(review)

    return {"message": "Thank you! Your review will appear once approved.", "review_id": review.id}


# ---------------------------------------------------------
# LIST APPROVED REVIEWS
# ---------------------------------------------------------

@router.get("")
def list_reviews(session: Session = Depends(get_session)):
    reviews = session.exec(
        select(Review)
        .where(Review.is_approved == True)  # noqa: E712
        .order_by(Review.created_at.desc())
    ).all()

    avg_rating = (
        sum(r.rating for r in reviews) / len(reviews)
        if reviews else 0
    )

    return {
        "average_rating": avg_rating,
        "total_reviews": len(reviews),
        "reviews": [ReviewRead.model_validate(r, from_attributes=True) for r in reviews],
    }
