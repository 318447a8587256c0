"""
Tests for the stock validation/decrement primitive (repos/product_repo.py).
"""
import pytest

from app.domain.exceptions import InsufficientStockError, ProductNotFoundError
from app.repos.product_repo import ProductRepo


class TestDecrementStock:

    def test_decrement_returns_remaining_stock(self, db, seed):
        pid = seed.product(quantity=10)

        remaining = ProductRepo(db).decrement_stock(pid, 3)
        db.commit()

        assert remaining == 7
        assert seed.stock(pid) == 7

    def test_exactly_sufficient_stock_goes_to_zero(self, db, seed):
        pid = seed.product(quantity=4)

        remaining = ProductRepo(db).decrement_stock(pid, 4)
        db.commit()

        assert remaining == 0
        assert seed.stock(pid) == 0

    def test_insufficient_stock_leaves_product_untouched(self, db, seed):
        pid = seed.product(quantity=2, name="Clay Teapot")

        with pytest.raises(InsufficientStockError) as exc_info:
            ProductRepo(db).decrement_stock(pid, 3)
        db.rollback()

        assert exc_info.value.product_id == pid
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2
        assert "Clay Teapot" in str(exc_info.value)
        assert seed.stock(pid) == 2

    def test_unknown_product(self, db):
        with pytest.raises(ProductNotFoundError) as exc_info:
            ProductRepo(db).decrement_stock(999, 1)
        db.rollback()

        assert exc_info.value.product_id == 999

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(self, db, seed, quantity):
        pid = seed.product(quantity=5)

        with pytest.raises(ValueError):
            ProductRepo(db).decrement_stock(pid, quantity)
        db.rollback()

        assert seed.stock(pid) == 5

    def test_decrement_checks_stored_stock_not_a_stale_read(self, session_factory, seed):
        """A value read earlier must not allow a decrement past zero."""
        pid = seed.product(quantity=5)

        stale = session_factory()
        repo = ProductRepo(stale)
        product = repo.get_product(pid)
        assert product.quantity == 5
        stale.commit()

        # another buyer takes 3 units in the meantime
        with session_factory() as other:
            ProductRepo(other).decrement_stock(pid, 3)
            other.commit()

        try:
            with pytest.raises(InsufficientStockError) as exc_info:
                repo.decrement_stock(pid, 3)
            stale.rollback()
        finally:
            stale.close()

        assert exc_info.value.available == 2
        assert seed.stock(pid) == 2


class TestGetStockForUpdate:

    def test_reads_current_value(self, db, seed):
        pid = seed.product(quantity=6)
        repo = ProductRepo(db)

        product = repo.get_product(pid)
        db.commit()
        seed.update_product(pid, quantity=1)

        assert repo.get_stock_for_update(pid).quantity == 1
        assert product.quantity == 1
        db.rollback()

    def test_missing_product(self, db):
        with pytest.raises(ProductNotFoundError):
            ProductRepo(db).get_stock_for_update(12345)
        db.rollback()
