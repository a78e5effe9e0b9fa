from __future__ import annotations

from hypothesis import given, strategies as st
from kungfu import Ok, Error

from checkoutflow import ItemId
from checkoutflow import cart as K
from checkoutflow.cart import Cart, MemoryCartStore, Variant
from tests.fakes import BrokenCartStore, cart_of, line


def unwrap(result):
    match result:
        case Ok(value):
            return value
        case Error(e):
            raise AssertionError(f"unexpected error: {e}")


# ═══════════════════════════════════════════════════════════════════════════════
# Pure operations
# ═══════════════════════════════════════════════════════════════════════════════


def test_add_item_appends_new_line() -> None:
    cart = unwrap(K.add_item(Cart(), line("tee", 75_000, quantity=2)))
    assert [i.id for i in cart.items] == [ItemId("tee")]
    assert cart.item_count == 2


def test_add_item_merges_same_identity_and_caps_at_stock() -> None:
    cart = cart_of(line("tee", 75_000, quantity=3, stock=4))
    merged = unwrap(K.add_item(cart, line("tee", 75_000, quantity=3, stock=4)))
    assert len(merged.items) == 1
    assert merged.items[0].quantity == 4


def test_add_item_keeps_variants_apart() -> None:
    xl = line("tee-xl", 75_000, variant=Variant("xl", "Size", "XL"))
    m = line("tee-m", 75_000, variant=Variant("m", "Size", "M"))
    cart = unwrap(K.add_item(unwrap(K.add_item(Cart(), xl)), m))
    assert [i.id.value for i in cart.items] == ["tee-xl", "tee-m"]


def test_add_item_refuses_non_positive_quantity() -> None:
    match K.add_item(Cart(), line("tee", 75_000, quantity=0)):
        case Error(e):
            assert e.code == "INVALID_QUANTITY"
        case Ok(_):
            raise AssertionError("zero quantity accepted")


def test_increment_refused_at_stock_limit() -> None:
    cart = cart_of(line("mug", 40_000, quantity=2, stock=2))
    assert cart.items[0].at_stock_limit
    match K.increment(cart, ItemId("mug")):
        case Error(e):
            assert e.code == "OUT_OF_STOCK"
        case Ok(_):
            raise AssertionError("went past stock")


def test_decrement_to_zero_removes_line() -> None:
    cart = cart_of(line("mug", 40_000, quantity=1), line("tee", 75_000))
    after = unwrap(K.decrement(cart, ItemId("mug")))
    assert [i.id.value for i in after.items] == ["tee"]


def test_set_quantity_unknown_item() -> None:
    match K.set_quantity(Cart(), ItemId("ghost"), 1):
        case Error(e):
            assert e.code == "ITEM_NOT_FOUND"
        case Ok(_):
            raise AssertionError("unknown item updated")


def test_remove_and_clear() -> None:
    cart = cart_of(line("a", 1_000), line("b", 2_000))
    assert K.remove_item(cart, ItemId("a")).items == (line("b", 2_000),)
    assert K.clear(cart).is_empty


def test_operations_preserve_order() -> None:
    cart = cart_of(line("a", 1_000), line("b", 2_000), line("c", 3_000))
    after = unwrap(K.increment(cart, ItemId("b")))
    assert [i.id.value for i in after.items] == ["a", "b", "c"]


@given(
    ops=st.lists(
        st.tuples(st.sampled_from(["inc", "dec", "set"]), st.integers(min_value=-2, max_value=8)),
        max_size=30,
    )
)
def test_quantity_stays_within_stock(ops: list[tuple[str, int]]) -> None:
    cart = cart_of(line("tee", 75_000, quantity=1, stock=5))
    item = ItemId("tee")
    for op, n in ops:
        if cart.find(item) is None:
            break
        match op:
            case "inc":
                result = K.increment(cart, item)
            case "dec":
                result = K.decrement(cart, item)
            case _:
                result = K.set_quantity(cart, item, n)
        match result:
            case Ok(updated):
                cart = updated
            case Error(_):
                pass
        for it in cart.items:
            assert 1 <= it.quantity <= it.stock


# ═══════════════════════════════════════════════════════════════════════════════
# Store
# ═══════════════════════════════════════════════════════════════════════════════


async def test_mutate_saves_on_success() -> None:
    store = MemoryCartStore(cart_of(line("tee", 75_000)))
    result = await K.mutate(store, lambda c: K.increment(c, ItemId("tee")))
    assert isinstance(result, Ok)
    assert store.cart.items[0].quantity == 2


async def test_mutate_leaves_store_alone_on_refusal() -> None:
    original = cart_of(line("tee", 75_000, stock=1))
    store = MemoryCartStore(original)
    result = await K.mutate(store, lambda c: K.increment(c, ItemId("tee")))
    assert isinstance(result, Error)
    assert store.cart == original


async def test_mutate_reports_store_failure() -> None:
    store = BrokenCartStore(cart_of(line("tee", 75_000)), fail_on="save")
    match await K.mutate(store, lambda c: K.increment(c, ItemId("tee"))):
        case Error(e):
            assert e.code == "CART_STORE_ERROR"
        case Ok(_):
            raise AssertionError("store failure hidden")
