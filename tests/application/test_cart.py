"""Integration tests for the cart use cases."""

from datetime import timedelta

import pytest

from rms.application.add_to_cart import AddToCartHandler
from rms.application.remove_from_cart import RemoveFromCartHandler
from rms.application.show_cart import ShowCartHandler
from rms.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from tests.application.helpers import ALICE, BOB, END, START, VENDOR_ONE, make_uow


class TestAddToCart:

    def test_rental_line(self):
        uow = make_uow()
        dto = AddToCartHandler(uow).handle(ALICE, "1", 2, True, START, END)
        assert dto.product_name == "Camera"
        assert dto.quantity == 2
        assert dto.start_date == START

    def test_naive_dates_are_taken_as_utc(self):
        uow = make_uow()
        dto = AddToCartHandler(uow).handle(
            ALICE, "1", 1, True, START.replace(tzinfo=None), END.replace(tzinfo=None)
        )
        assert dto.start_date == START

    def test_purchase_line_drops_dates(self):
        uow = make_uow()
        dto = AddToCartHandler(uow).handle(ALICE, "2", 1, False, START, END)
        assert dto.start_date is None and dto.end_date is None

    def test_rental_without_dates_rejected(self):
        with pytest.raises(ValidationError, match="required for rental"):
            AddToCartHandler(make_uow()).handle(ALICE, "1", 1, True)

    def test_inverted_window_rejected(self):
        with pytest.raises(ValidationError, match="before end date"):
            AddToCartHandler(make_uow()).handle(ALICE, "1", 1, True, END, START)

    def test_more_than_available_rejected(self):
        uow = make_uow(camera=1)
        with pytest.raises(InsufficientStockError):
            AddToCartHandler(uow).handle(ALICE, "1", 2, True, START, END)
        assert uow.carts.list_for_user("alice") == []

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            AddToCartHandler(make_uow()).handle(ALICE, "99", 1, False)

    def test_removed_product_not_orderable(self):
        uow = make_uow()
        uow.products.get_by_id("1").soft_delete()
        with pytest.raises(NotFoundError):
            AddToCartHandler(uow).handle(ALICE, "1", 1, False)

    def test_unavailable_product_rejected(self):
        uow = make_uow()
        uow.products.get_by_id("1").is_available = False
        with pytest.raises(ValidationError, match="not available"):
            AddToCartHandler(uow).handle(ALICE, "1", 1, False)

    def test_re_adding_replaces_the_line(self):
        uow = make_uow()
        handler = AddToCartHandler(uow)
        handler.handle(ALICE, "1", 1, True, START, END)
        handler.handle(ALICE, "1", 3, True, START, END + timedelta(days=1))
        lines = uow.carts.list_for_user("alice")
        assert len(lines) == 1
        assert lines[0].quantity.value == 3

    def test_vendor_cannot_shop(self):
        with pytest.raises(UnauthorizedError):
            AddToCartHandler(make_uow()).handle(VENDOR_ONE, "1", 1, False)


class TestRemoveAndShow:

    def test_show_lists_only_own_lines(self):
        uow = make_uow()
        add = AddToCartHandler(uow)
        add.handle(ALICE, "1", 1, True, START, END)
        add.handle(ALICE, "3", 2, False)
        add.handle(BOB, "2", 1, False)

        lines = ShowCartHandler(uow).handle(ALICE)

        assert sorted(l.product_name for l in lines) == ["Camera", "Lens"]

    def test_remove(self):
        uow = make_uow()
        AddToCartHandler(uow).handle(ALICE, "3", 2, False)
        RemoveFromCartHandler(uow).handle(ALICE, "3")
        assert ShowCartHandler(uow).handle(ALICE) == []

    def test_remove_missing_line(self):
        with pytest.raises(NotFoundError, match="not in the cart"):
            RemoveFromCartHandler(make_uow()).handle(ALICE, "3")
