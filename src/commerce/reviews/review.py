"""Review aggregate (CQRS) — one customer's rating and comment for a product.

At most one review exists per (user, product). The uniqueness check and the
verified-purchase gate need repository queries, so they live in the
submission handler; the aggregate guards its own fields.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, Text, ValueObject

from commerce.domain import commerce
from commerce.reviews.events import ReviewEdited, ReviewSubmitted

COMMENT_MIN_LENGTH = 10
COMMENT_MAX_LENGTH = 500


@commerce.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


@commerce.aggregate
class Review:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = ValueObject(Rating, required=True)
    comment = Text(required=True)
    is_filtered = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def comment_length_within_bounds(self):
        if self.comment is None:
            return
        length = len(self.comment.strip())
        if length < COMMENT_MIN_LENGTH or length > COMMENT_MAX_LENGTH:
            raise ValidationError(
                {
                    "comment": [
                        f"Comment must be between {COMMENT_MIN_LENGTH} and {COMMENT_MAX_LENGTH} characters"
                    ]
                }
            )

    @classmethod
    def submit(cls, user_id, product_id, rating, comment, is_filtered=False):
        now = datetime.now(UTC)
        review = cls(
            user_id=user_id,
            product_id=product_id,
            rating=Rating(score=rating),
            comment=comment,
            is_filtered=is_filtered,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review

    def edit(self, rating=None, comment=None, is_filtered=None):
        """Change the rating and/or comment. ``is_filtered`` travels with a new comment."""
        if rating is None and comment is None:
            raise ValidationError({"review": ["Nothing to update"]})

        if rating is not None:
            self.rating = Rating(score=rating)
        if comment is not None:
            self.comment = comment
            self.is_filtered = bool(is_filtered)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                rating=self.rating.score,
                edited_at=now,
            )
        )
