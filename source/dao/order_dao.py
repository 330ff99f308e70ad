"""DAO for the orders table, including the stored order functions."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import Numeric, String, func, select

from dao.base_dao import BaseDao
from utilities.errors import InvalidOrderStatusError
from utilities.models import ORDER_STATUSES, SHIPPED_STATUSES, Order


class OrderDao(BaseDao[Order]):
    """
    Queries and status changes for orders.

    Tax and loyalty calculations are database functions; this class only
    calls them and returns their results.
    """

    model = Order

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        return self.session.query(Order).filter_by(order_number=order_number).first()

    def find_by_user_id(self, user_id: int) -> List[Order]:
        return (
            self.session.query(Order)
            .filter_by(user_id=user_id)
            .order_by(Order.order_date.desc(), Order.id)
            .all()
        )

    def find_by_status(self, status: str) -> List[Order]:
        return (
            self.session.query(Order)
            .filter_by(status=self._check_status(status))
            .order_by(Order.order_date.desc(), Order.id)
            .all()
        )

    def find_by_user_id_and_status(self, user_id: int, status: str) -> List[Order]:
        return (
            self.session.query(Order)
            .filter_by(user_id=user_id, status=self._check_status(status))
            .order_by(Order.order_date.desc(), Order.id)
            .all()
        )

    def find_by_date_range(self, start: datetime, end: datetime) -> List[Order]:
        return (
            self.session.query(Order)
            .filter(Order.order_date.between(start, end))
            .order_by(Order.order_date.desc(), Order.id)
            .all()
        )

    def find_for_sales_report(self, days_back: int) -> List[Order]:
        """Shipped or delivered orders placed within the last days_back days."""
        since = datetime.now() - timedelta(days=days_back)
        return (
            self.session.query(Order)
            .filter(Order.status.in_(SHIPPED_STATUSES))
            .filter(Order.order_date >= since)
            .order_by(Order.order_date.desc(), Order.id)
            .all()
        )

    def update_status(self, order_id: int, status: str) -> None:
        order = self._get_or_raise(order_id)
        order.status = self._check_status(status)
        self.session.flush()

    def update_shipped_date(self, order_id: int, shipped_date: datetime) -> None:
        order = self._get_or_raise(order_id)
        order.shipped_date = shipped_date
        self.session.flush()

    def calculate_order_total(self, order_id: int) -> Decimal:
        """Order total including the default tax, computed by the database."""
        return self.session.scalar(
            select(func.calculate_order_total(order_id, type_=Numeric(10, 2)))
        )

    def calculate_order_total_with_tax(
        self, order_id: int, tax_rate: Decimal
    ) -> Decimal:
        return self.session.scalar(
            select(
                func.calculate_order_total_with_tax(
                    order_id, tax_rate, type_=Numeric(10, 2)
                )
            )
        )

    def get_user_loyalty_status(self, user_id: int) -> str:
        return self.session.scalar(
            select(func.get_user_loyalty_status(user_id, type_=String(20)))
        )

    def count_by_status(self, status: str) -> int:
        return (
            self.session.query(Order)
            .filter_by(status=self._check_status(status))
            .count()
        )

    def get_total_revenue(self) -> Decimal:
        """Sum of shipped and delivered order totals."""
        revenue = (
            self.session.query(func.sum(Order.total_amount))
            .filter(Order.status.in_(SHIPPED_STATUSES))
            .scalar()
        )
        return Decimal(revenue) if revenue is not None else Decimal("0.00")

    @staticmethod
    def _check_status(status: str) -> str:
        if status not in ORDER_STATUSES:
            raise InvalidOrderStatusError(status)
        return status
