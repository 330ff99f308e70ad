"""Tests for CSV dataset loading, export and table assertions."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from conftest import make_review, make_user
from data_initializer.data_initializer import DataInitializer
from data_initializer.dataset import assert_table_matches, coerce_value, read_table
from utilities.errors import DatasetError
from utilities.models import TABLES_IN_DEPENDENCY_ORDER, Order, Product, User


@pytest.fixture
def initializer(session, dataset_dir):
    return DataInitializer(session, str(dataset_dir))


@pytest.fixture
def loaded(initializer):
    initializer.clean_insert()
    return initializer


class TestCleanInsert:
    """Tests for DataInitializer.clean_insert."""

    def test_inserts_every_table(self, initializer):
        inserted = initializer.clean_insert()

        assert inserted == {
            "users": 3,
            "products": 3,
            "orders": 2,
            "order_items": 3,
            "reviews": 2,
        }

    def test_values_are_typed(self, session, loaded):
        user = session.query(User).filter_by(username="bwayne").one()
        assert user.date_of_birth == date(1972, 2, 19)
        assert user.is_active is False

        lamp = session.query(Product).filter_by(sku="LMP-00000002").one()
        assert lamp.price == Decimal("89.50")
        assert lamp.stock_quantity == 0

        pending = session.query(Order).filter_by(order_number="ORD-00000002").one()
        assert pending.shipped_date is None
        assert pending.order_date == datetime(2024, 3, 10, 15, 30)

    def test_replaces_existing_rows(self, session, daos, initializer):
        daos.users.create(make_user(username="stranger", email="stranger@example.com"))
        session.commit()

        initializer.clean_insert()

        assert daos.users.find_by_username("stranger") is None
        assert daos.users.count() == 3

    def test_every_table_matches_its_csv(self, session, loaded):
        for table_name in TABLES_IN_DEPENDENCY_ORDER:
            expected = loaded.load_csv_data(loaded.csv_path(table_name))
            assert_table_matches(session, table_name, expected)

    def test_missing_directory_empties_tables(self, session, loaded, tmp_path):
        DataInitializer(session, str(tmp_path / "missing")).clean_insert()

        for table_name in TABLES_IN_DEPENDENCY_ORDER:
            assert read_table(session, table_name).empty


class TestAssertTableMatches:
    """Tests for assert_table_matches."""

    def test_dao_insert_is_detected_then_rolled_back(self, session, daos, loaded):
        expected = loaded.load_csv_data(loaded.csv_path("reviews"))

        daos.reviews.create(make_review(user_id=3, product_id=2))
        with pytest.raises(DatasetError, match="expected 2 rows, found 3"):
            assert_table_matches(session, "reviews", expected)

        session.rollback()
        assert_table_matches(session, "reviews", expected)

    def test_value_mismatch_raises(self, session, loaded):
        expected = loaded.load_csv_data(loaded.csv_path("products"))
        expected.loc[expected["id"] == 1, "price"] = 50.00

        with pytest.raises(DatasetError, match="products"):
            assert_table_matches(session, "products", expected)

    def test_only_listed_columns_are_compared(self, session, loaded):
        expected = loaded.load_csv_data(loaded.csv_path("users"))[["id", "username"]]

        assert_table_matches(session, "users", expected)

    def test_unknown_column_raises(self, session, loaded):
        expected = loaded.load_csv_data(loaded.csv_path("users"))
        expected["nickname"] = "x"

        with pytest.raises(DatasetError, match="nickname"):
            assert_table_matches(session, "users", expected)

    def test_unknown_table_raises(self, session):
        with pytest.raises(DatasetError, match="Unknown table"):
            read_table(session, "invoices")


class TestExport:
    """Tests for DataInitializer.export_dataset."""

    def test_export_writes_one_file_per_table(self, session, loaded, tmp_path):
        paths = loaded.export_dataset(str(tmp_path))

        assert [p.rsplit("/", 1)[-1] for p in paths] == [
            f"{name}.csv" for name in TABLES_IN_DEPENDENCY_ORDER
        ]

        exported = DataInitializer(session, str(tmp_path))
        orders = exported.load_csv_data(exported.csv_path("orders"))
        assert list(orders["order_number"]) == ["ORD-00000001", "ORD-00000002"]
        assert_table_matches(session, "orders", orders)


class TestCoerceValue:
    """Tests for coerce_value."""

    def test_boolean_strings(self):
        column_type = User.__table__.c.is_active.type

        assert coerce_value(column_type, "true") is True
        assert coerce_value(column_type, "FALSE") is False

    def test_missing_values_become_none(self):
        assert coerce_value(Order.__table__.c.shipped_date.type, float("nan")) is None
        assert coerce_value(Order.__table__.c.shipped_date.type, None) is None

    def test_numeric_keeps_scale(self):
        assert coerce_value(Product.__table__.c.price.type, 89.5) == Decimal("89.50")
