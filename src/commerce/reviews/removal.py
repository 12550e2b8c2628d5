"""DeleteReview — the author or an administrator removes a review."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.reviews.editing import load_review
from commerce.reviews.rating import recompute_rating
from commerce.reviews.review import Review
from commerce.shared.access import Role, require_owner_or_admin

logger = structlog.get_logger(__name__)


@commerce.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@commerce.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = load_review(command.review_id)
        require_owner_or_admin(review.user_id, command.actor_id, command.actor_role, "delete this review")

        product_id = review.product_id
        current_domain.repository_for(Review)._dao.delete(review)
        recompute_rating(product_id)

        logger.info("review_deleted", review_id=str(command.review_id), deleted_by=str(command.actor_id))
