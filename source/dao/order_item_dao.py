"""DAO for the order_items table."""

from typing import List, Optional

from dao.base_dao import BaseDao
from utilities.models import OrderItem


class OrderItemDao(BaseDao[OrderItem]):
    """
    Queries and quantity changes for order line items.
    """

    model = OrderItem

    def find_by_order_id(self, order_id: int) -> List[OrderItem]:
        return (
            self.session.query(OrderItem)
            .filter_by(order_id=order_id)
            .order_by(OrderItem.id)
            .all()
        )

    def find_by_product_id(self, product_id: int) -> List[OrderItem]:
        return (
            self.session.query(OrderItem)
            .filter_by(product_id=product_id)
            .order_by(OrderItem.id.desc())
            .all()
        )

    def find_by_order_id_and_product_id(
        self, order_id: int, product_id: int
    ) -> Optional[OrderItem]:
        return (
            self.session.query(OrderItem)
            .filter_by(order_id=order_id, product_id=product_id)
            .first()
        )

    def update_quantity(self, order_item_id: int, new_quantity: int) -> None:
        """Change the quantity and recompute the line total."""
        if new_quantity <= 0:
            raise ValueError("Quantity must be positive")
        item = self._get_or_raise(order_item_id)
        item.quantity = new_quantity
        item.total_price = item.unit_price * new_quantity
        self.session.flush()

    def delete_by_order_id(self, order_id: int) -> int:
        return self.session.query(OrderItem).filter_by(order_id=order_id).delete()

    def count_by_order_id(self, order_id: int) -> int:
        return self.session.query(OrderItem).filter_by(order_id=order_id).count()
