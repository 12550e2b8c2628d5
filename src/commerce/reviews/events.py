"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from commerce.domain import commerce


@commerce.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a product they received."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@commerce.event(part_of="Review")
class ReviewEdited:
    """The author changed the rating or comment of a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    edited_at = DateTime(required=True)
