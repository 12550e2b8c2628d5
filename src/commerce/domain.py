"""Commerce domain — order lifecycle and inventory consistency.

Products, carts, orders and reviews live in one domain so that a checkout can
reserve stock, persist the order and drop the cart inside a single unit of
work.
"""

from protean.domain import Domain

from commerce.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

commerce = Domain(name="commerce")
