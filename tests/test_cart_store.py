"""
Tests for the cart store.

Covers stock gating, line lifecycle and the invariant that stock plus
reserved quantity always equals the stock at catalog load.
"""

import pytest
from hypothesis import settings, strategies as st
from hypothesis.stateful import RuleBasedStateMachine, rule, invariant

from storefront.core.errors import OutOfStock, ProductNotFound
from storefront.models import Product
from storefront.services import CartStore

from conftest import make_products


def assert_conserved(store: CartStore):
    for product in store.products:
        assert product.stock + store.quantity_of(product.id) == store.baseline_stock(product.id)


# ============================================================================
# add_item / increment
# ============================================================================

def test_add_item_creates_line_and_reserves_stock(store):
    line = store.add_item(1)

    assert line.product_id == 1
    assert line.quantity == 1
    assert store.get_product(1).stock == 4
    assert_conserved(store)


def test_add_item_three_times_accumulates_on_one_line(store):
    for _ in range(3):
        store.add_item(1)

    assert [(line.product_id, line.quantity) for line in store.lines] == [(1, 3)]
    assert store.get_product(1).stock == 2


def test_add_item_on_exhausted_stock_raises_and_leaves_state(store):
    store.add_item(2)
    assert store.get_product(2).stock == 0

    with pytest.raises(OutOfStock) as exc_info:
        store.add_item(2)

    assert exc_info.value.product_id == 2
    assert store.quantity_of(2) == 1
    assert store.get_product(2).stock == 0
    assert_conserved(store)


def test_increment_at_zero_stock_is_rejected(store):
    with pytest.raises(OutOfStock):
        store.increment(3)

    assert store.is_empty
    assert store.get_product(3).stock == 0


def test_increment_without_line_creates_it(store):
    store.increment(1)

    assert store.quantity_of(1) == 1
    assert store.get_product(1).stock == 4


def test_unknown_product_raises_not_found(store):
    with pytest.raises(ProductNotFound):
        store.add_item(99)
    assert store.is_empty


# ============================================================================
# decrement / remove_item / clear
# ============================================================================

def test_increment_then_decrement_restores_state(store):
    store.add_item(1)
    before = (store.quantity_of(1), store.get_product(1).stock)

    store.increment(1)
    store.decrement(1)

    assert (store.quantity_of(1), store.get_product(1).stock) == before


def test_decrement_last_unit_removes_line(store):
    store.add_item(1)

    assert store.decrement(1) is None
    assert store.is_empty
    assert store.get_product(1).stock == 5


def test_decrement_missing_line_is_noop(store):
    assert store.decrement(1) is None
    assert store.decrement(42) is None
    assert store.get_product(1).stock == 5


def test_remove_item_returns_whole_quantity(store):
    store.add_item(1)
    store.add_item(1)
    store.add_item(2)

    store.remove_item(1)

    assert [line.product_id for line in store.lines] == [2]
    assert store.get_product(1).stock == 5
    store.remove_item(1)
    store.remove_item(77)
    assert_conserved(store)


def test_clear_restores_every_baseline(store):
    store.add_item(1)
    store.add_item(1)
    store.add_item(2)

    store.clear()

    assert store.is_empty
    assert [p.stock for p in store.products] == [5, 1, 0]


def test_clear_on_empty_cart(store):
    store.clear()
    assert store.is_empty


# ============================================================================
# Reads
# ============================================================================

def test_lines_keep_insertion_order(store):
    store.add_item(2)
    store.add_item(1)
    store.add_item(1)

    assert [line.product_id for line in store.lines] == [2, 1]


def test_item_count_and_total(store):
    store.add_item(1)
    store.add_item(1)
    store.add_item(2)

    assert store.item_count == 3
    assert store.total == pytest.approx(24.5)


def test_snapshot_denormalizes_lines(store):
    store.add_item(1)
    store.add_item(1)

    [line] = store.snapshot()

    assert line.id == 1
    assert line.name == "Vase"
    assert line.price == 10
    assert line.stock == 3
    assert line.quantity == 2


def test_duplicate_product_ids_rejected():
    with pytest.raises(ValueError):
        CartStore([
            Product(id=1, name="A", price=1, stock=1),
            Product(id=1, name="B", price=2, stock=2),
        ])


# ============================================================================
# Conservation under arbitrary operation sequences
# ============================================================================

product_ids = st.sampled_from([1, 2, 3, 4])


class CartStoreMachine(RuleBasedStateMachine):
    def __init__(self):
        super().__init__()
        self.store = CartStore(make_products())

    @rule(product_id=product_ids)
    def add_item(self, product_id):
        self._reserve(self.store.add_item, product_id)

    @rule(product_id=product_ids)
    def increment(self, product_id):
        self._reserve(self.store.increment, product_id)

    @rule(product_id=product_ids)
    def decrement(self, product_id):
        self.store.decrement(product_id)

    @rule(product_id=product_ids)
    def remove_item(self, product_id):
        self.store.remove_item(product_id)

    @rule()
    def clear(self):
        self.store.clear()
        assert self.store.is_empty

    def _reserve(self, action, product_id):
        before = [(p.id, p.stock, self.store.quantity_of(p.id)) for p in self.store.products]
        try:
            action(product_id)
        except (OutOfStock, ProductNotFound):
            after = [(p.id, p.stock, self.store.quantity_of(p.id)) for p in self.store.products]
            assert after == before

    @invariant()
    def stock_is_conserved(self):
        assert_conserved(self.store)

    @invariant()
    def no_negative_stock_or_empty_lines(self):
        assert all(p.stock >= 0 for p in self.store.products)
        assert all(line.quantity >= 1 for line in self.store.lines)


CartStoreMachine.TestCase.settings = settings(max_examples=50, stateful_step_count=30)
TestCartStoreMachine = CartStoreMachine.TestCase
