"""CreateReview — a verified buyer rates a product.

The review and the product's refreshed rating summary commit together.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from commerce.catalogue.management import load_product
from commerce.domain import commerce
from commerce.reviews.eligibility import find_review, has_purchased
from commerce.reviews.rating import recompute_rating
from commerce.reviews.review import Review
from commerce.shared.errors import DuplicateReview, Unauthorized
from commerce.shared.services import get_services

logger = structlog.get_logger(__name__)


@commerce.command(part_of="Review")
class CreateReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)


@commerce.command_handler(part_of=Review)
class CreateReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        load_product(command.product_id)

        if not has_purchased(command.user_id, command.product_id):
            raise Unauthorized("You can only review products you have purchased and received")

        if find_review(command.user_id, command.product_id) is not None:
            raise DuplicateReview(command.user_id, command.product_id)

        sanitized = get_services().sanitizer.sanitize(command.comment)
        review = Review.submit(
            user_id=command.user_id,
            product_id=command.product_id,
            rating=command.rating,
            comment=sanitized.text,
            is_filtered=sanitized.was_filtered,
        )
        current_domain.repository_for(Review).add(review)
        recompute_rating(command.product_id)

        logger.info(
            "review_created",
            review_id=str(review.id),
            product_id=str(command.product_id),
            is_filtered=sanitized.was_filtered,
        )
        return str(review.id)
