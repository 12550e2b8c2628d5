"""Review read operations."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from commerce.catalogue.management import load_product
from commerce.reviews.eligibility import find_review, has_purchased
from commerce.reviews.review import Review
from commerce.shared.paging import Page, paginate


@dataclass(frozen=True)
class ReviewEligibility:
    can_review: bool
    has_purchased: bool
    existing_review_id: str | None = None


def can_user_review(user_id, product_id) -> ReviewEligibility:
    """A user may review a product they received and have not reviewed yet."""
    purchased = has_purchased(user_id, product_id)
    existing = find_review(user_id, product_id)
    return ReviewEligibility(
        can_review=purchased and existing is None,
        has_purchased=purchased,
        existing_review_id=str(existing.id) if existing is not None else None,
    )


def list_product_reviews(product_id, page=1, limit=None) -> Page:
    load_product(product_id)
    query = (
        current_domain.repository_for(Review)._dao.query.filter(product_id=str(product_id)).order_by("-created_at")
    )
    return paginate(query, page, limit)


def list_user_reviews(user_id) -> list[Review]:
    return (
        current_domain.repository_for(Review)
        ._dao.query.filter(user_id=str(user_id))
        .order_by("-created_at")
        .limit(None)
        .all()
        .items
    )
