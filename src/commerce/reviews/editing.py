"""UpdateReview — the author changes their rating or comment."""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.reviews.rating import recompute_rating
from commerce.reviews.review import Review
from commerce.shared.errors import NotFound, Unauthorized
from commerce.shared.services import get_services


@commerce.command(part_of="Review")
class UpdateReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    rating = Integer()
    comment = Text()


def load_review(review_id) -> Review:
    review = current_domain.repository_for(Review).get_or_none(str(review_id))
    if review is None:
        raise NotFound("Review", review_id)
    return review


@commerce.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        review = load_review(command.review_id)
        if str(review.user_id) != str(command.actor_id):
            raise Unauthorized("You can only edit your own reviews")

        comment = command.comment
        is_filtered = None
        if comment is not None:
            sanitized = get_services().sanitizer.sanitize(comment)
            comment, is_filtered = sanitized.text, sanitized.was_filtered

        review.edit(rating=command.rating, comment=comment, is_filtered=is_filtered)
        current_domain.repository_for(Review).add(review)
        recompute_rating(review.product_id)
        return str(review.id)
