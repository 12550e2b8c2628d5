"""Tests for the Review aggregate and its Rating value object."""

import pytest
from commerce.reviews.events import ReviewEdited, ReviewSubmitted
from commerce.reviews.review import Rating, Review
from protean.exceptions import ValidationError

COMMENT = "Sturdy and easy to assemble."


def _review(**overrides):
    defaults = {"user_id": "user-001", "product_id": "prod-001", "rating": 4, "comment": COMMENT}
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestRating:
    @pytest.mark.parametrize("score", [1, 3, 5])
    def test_valid(self, score):
        assert Rating(score=score).score == score

    @pytest.mark.parametrize("score", [0, 6, -2])
    def test_out_of_range(self, score):
        with pytest.raises(ValidationError):
            Rating(score=score)


class TestSubmit:
    def test_fields(self):
        review = _review()
        assert review.rating.score == 4
        assert review.comment == COMMENT
        assert review.is_filtered is False

    def test_raises_review_submitted(self):
        event = _review()._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.rating == 4

    def test_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            _review(rating=6)

    @pytest.mark.parametrize("comment", ["Too short", "x" * 501])
    def test_comment_length(self, comment):
        with pytest.raises(ValidationError):
            _review(comment=comment)


class TestEdit:
    def test_rating_only(self):
        review = _review()
        review._events.clear()

        review.edit(rating=2)

        assert review.rating.score == 2
        assert review.comment == COMMENT
        assert isinstance(review._events[0], ReviewEdited)

    def test_comment_carries_filter_flag(self):
        review = _review()
        review.edit(comment="Arrived scratched, *** quality.", is_filtered=True)
        assert review.is_filtered is True

        review.edit(comment="Replacement arrived in perfect shape.")
        assert review.is_filtered is False

    def test_nothing_to_change(self):
        with pytest.raises(ValidationError):
            _review().edit()

    def test_invalid_rating(self):
        review = _review()
        with pytest.raises(ValidationError):
            review.edit(rating=0)
