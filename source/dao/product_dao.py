"""DAO for the products table."""

from decimal import Decimal
from typing import List, Optional

from dao.base_dao import BaseDao
from utilities.models import Product


class ProductDao(BaseDao[Product]):
    """
    Queries, stock changes and availability flags for products.
    """

    model = Product

    def find_by_sku(self, sku: str) -> Optional[Product]:
        return self.session.query(Product).filter_by(sku=sku).first()

    def find_by_category(self, category: str) -> List[Product]:
        return (
            self.session.query(Product)
            .filter_by(category=category)
            .order_by(Product.id)
            .all()
        )

    def find_available(self) -> List[Product]:
        return (
            self.session.query(Product)
            .filter_by(is_available=True)
            .order_by(Product.id)
            .all()
        )

    def find_with_stock_above(self, threshold: int) -> List[Product]:
        return (
            self.session.query(Product)
            .filter(Product.stock_quantity > threshold)
            .order_by(Product.stock_quantity.desc(), Product.id)
            .all()
        )

    def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[Product]:
        """Products priced between min_price and max_price inclusive."""
        return (
            self.session.query(Product)
            .filter(Product.price.between(min_price, max_price))
            .order_by(Product.price, Product.id)
            .all()
        )

    def update_stock(self, product_id: int, new_quantity: int) -> None:
        if new_quantity < 0:
            raise ValueError("Stock quantity must not be negative")
        product = self._get_or_raise(product_id)
        product.stock_quantity = new_quantity
        self.session.flush()

    def reduce_stock(self, product_id: int, quantity: int) -> None:
        """Take quantity out of stock; never goes below zero."""
        product = self._get_or_raise(product_id)
        if quantity > product.stock_quantity:
            raise ValueError(
                f"Insufficient stock for product {product_id}: "
                f"{product.stock_quantity} < {quantity}"
            )
        product.stock_quantity -= quantity
        self.session.flush()

    def increase_stock(self, product_id: int, quantity: int) -> None:
        product = self._get_or_raise(product_id)
        product.stock_quantity += quantity
        self.session.flush()

    def mark_available(self, product_id: int) -> None:
        product = self._get_or_raise(product_id)
        product.is_available = True
        self.session.flush()

    def mark_unavailable(self, product_id: int) -> None:
        product = self._get_or_raise(product_id)
        product.is_available = False
        self.session.flush()

    def count_by_category(self, category: str) -> int:
        return self.session.query(Product).filter_by(category=category).count()
