"""Application tests for cart commands and their reconciled views."""

import pytest
from commerce.cart.cart import Cart
from commerce.cart.items import AddCartItem, ClearCart, GetOrCreateCart, RemoveCartItem, UpdateCartItem
from commerce.catalogue.management import UpdateProduct
from commerce.inventory.ledger import DecrementStock
from commerce.shared.errors import InsufficientStock, NotFound
from protean import current_domain
from protean.exceptions import ValidationError


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _carts_for(user_id):
    return current_domain.repository_for(Cart)._dao.query.filter(user_id=user_id).all().items


class TestGetOrCreateCart:
    def test_creates_empty_cart(self):
        view = _process(GetOrCreateCart(user_id="user-001"))
        assert view.items == []
        assert view.removed == []
        assert view.total_items == 0
        assert len(_carts_for("user-001")) == 1

    def test_is_idempotent(self):
        first = _process(GetOrCreateCart(user_id="user-001"))
        second = _process(GetOrCreateCart(user_id="user-001"))
        assert first.cart_id == second.cart_id
        assert len(_carts_for("user-001")) == 1


class TestAddCartItem:
    def test_creates_cart_lazily(self, make_product):
        product_id = make_product(name="Ceramic Vase", price=30.0, stock=5)

        view = _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=2))

        assert view.total_items == 2
        line = view.items[0]
        assert line.name == "Ceramic Vase"
        assert line.unit_price == 30.0
        assert view.subtotal == 60.0

    def test_view_uses_sale_price(self, make_product):
        product_id = make_product(price=30.0, sale_price=25.0, stock=5)
        view = _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=2))
        assert view.subtotal == 50.0

    def test_stock_limit_keeps_existing_quantity(self, make_product):
        product_id = make_product(stock=5)
        _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=3))

        with pytest.raises(InsufficientStock):
            _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=3))

        view = _process(GetOrCreateCart(user_id="user-001"))
        assert view.items[0].quantity == 3

    def test_inactive_product_rejected(self, make_product):
        product_id = make_product(is_active=False)
        with pytest.raises(ValidationError):
            _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=1))

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            _process(AddCartItem(user_id="user-001", product_id="ghost", quantity=1))


class TestUpdateAndRemove:
    def test_update_quantity(self, make_product):
        product_id = make_product(stock=5)
        _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=1))

        view = _process(UpdateCartItem(user_id="user-001", product_id=product_id, quantity=4))

        assert view.items[0].quantity == 4

    def test_update_without_cart(self, make_product):
        product_id = make_product(stock=5)
        with pytest.raises(NotFound):
            _process(UpdateCartItem(user_id="user-001", product_id=product_id, quantity=1))

    def test_remove_item(self, make_product):
        keep = make_product(name="Keep Me")
        drop = make_product(name="Drop Me")
        _process(AddCartItem(user_id="user-001", product_id=keep, quantity=1))
        _process(AddCartItem(user_id="user-001", product_id=drop, quantity=1))

        view = _process(RemoveCartItem(user_id="user-001", product_id=drop))

        assert [line.product_id for line in view.items] == [keep]

    def test_clear_cart(self, make_product):
        product_id = make_product()
        _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=2))

        view = _process(ClearCart(user_id="user-001"))

        assert view.items == []
        cart = _carts_for("user-001")[0]
        assert cart.total_items == 0


class TestReconciliation:
    def test_inactive_product_is_dropped_with_notice(self, make_product):
        product_id = make_product(name="Retired Lamp")
        _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=1))
        _process(UpdateProduct(actor_role="Admin", product_id=product_id, is_active=False))

        view = _process(GetOrCreateCart(user_id="user-001"))

        assert view.items == []
        assert len(view.removed) == 1
        assert view.removed[0].reason == "inactive"
        assert view.removed[0].name == "Retired Lamp"
        assert len(_carts_for("user-001")[0].items) == 0

    def test_sold_out_product_is_dropped_with_notice(self, make_product):
        product_id = make_product(stock=2)
        _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=1))
        _process(DecrementStock(product_id=product_id, quantity=2))

        view = _process(GetOrCreateCart(user_id="user-001"))

        assert view.removed[0].reason == "out_of_stock"
        assert view.removed[0].quantity == 1

    def test_notice_is_reported_once(self, make_product):
        product_id = make_product(stock=1)
        _process(AddCartItem(user_id="user-001", product_id=product_id, quantity=1))
        _process(DecrementStock(product_id=product_id, quantity=1))

        _process(GetOrCreateCart(user_id="user-001"))
        view = _process(GetOrCreateCart(user_id="user-001"))

        assert view.removed == []
