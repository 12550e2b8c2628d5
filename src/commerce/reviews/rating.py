"""Rating aggregation: keeps a product's ``num_reviews`` and ``average_rating``
in line with its reviews.

Review handlers call :func:`recompute_rating` after every create, edit and
delete, inside the same unit of work as the review change. Saving a review
never triggers it implicitly.
"""

import structlog
from protean.utils.globals import current_domain

from commerce.catalogue.management import load_product
from commerce.catalogue.product import Product
from commerce.reviews.review import Review

logger = structlog.get_logger(__name__)


def summarize(scores) -> tuple[int, float]:
    """Count and arithmetic mean of ``scores``; the mean is 0 when empty."""
    scores = list(scores)
    if not scores:
        return 0, 0.0
    return len(scores), sum(scores) / len(scores)


def recompute_rating(product_id) -> Product:
    product = load_product(product_id)

    reviews = (
        current_domain.repository_for(Review)
        ._dao.query.filter(product_id=str(product_id))
        .limit(None)
        .all()
    )
    num_reviews, average = summarize(review.rating.score for review in reviews.items)

    product.record_rating(num_reviews, average)
    current_domain.repository_for(Product).add(product)

    logger.debug(
        "product_rating_recomputed",
        product_id=str(product_id),
        num_reviews=num_reviews,
        average_rating=average,
    )
    return product
