"""DAO for the reviews table."""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import Numeric, func, select

from dao.base_dao import BaseDao
from utilities.models import Review


class ReviewDao(BaseDao[Review]):
    """
    Queries and verification flags for product reviews.
    """

    model = Review

    def find_by_user_id(self, user_id: int) -> List[Review]:
        return self._newest_first(self.session.query(Review).filter_by(user_id=user_id))

    def find_by_product_id(self, product_id: int) -> List[Review]:
        return self._newest_first(
            self.session.query(Review).filter_by(product_id=product_id)
        )

    def find_by_user_id_and_product_id(
        self, user_id: int, product_id: int
    ) -> Optional[Review]:
        return (
            self.session.query(Review)
            .filter_by(user_id=user_id, product_id=product_id)
            .first()
        )

    def find_by_rating(self, rating: int) -> List[Review]:
        return self._newest_first(self.session.query(Review).filter_by(rating=rating))

    def find_by_minimum_rating(self, min_rating: int) -> List[Review]:
        return (
            self.session.query(Review)
            .filter(Review.rating >= min_rating)
            .order_by(Review.rating.desc(), Review.review_date.desc(), Review.id)
            .all()
        )

    def find_verified_purchases(self) -> List[Review]:
        return self._newest_first(
            self.session.query(Review).filter_by(is_verified_purchase=True)
        )

    def find_verified_purchases_by_product_id(self, product_id: int) -> List[Review]:
        return self._newest_first(
            self.session.query(Review).filter_by(
                product_id=product_id, is_verified_purchase=True
            )
        )

    def mark_as_verified_purchase(self, review_id: int) -> None:
        review = self._get_or_raise(review_id)
        review.is_verified_purchase = True
        self.session.flush()

    def get_average_rating_for_product(self, product_id: int) -> Decimal:
        """Average rating, 0 when the product has no reviews."""
        average = self.session.scalar(
            select(
                func.coalesce(func.avg(Review.rating), 0).cast(Numeric(3, 2))
            ).where(Review.product_id == product_id)
        )
        return Decimal(average).quantize(Decimal("0.01"))

    def get_product_rating(self, product_id: int) -> Decimal:
        """Average rating as reported by the get_product_rating database function."""
        return self.session.scalar(
            select(func.get_product_rating(product_id, type_=Numeric(3, 2)))
        )

    def count_by_product_id(self, product_id: int) -> int:
        return self.session.query(Review).filter_by(product_id=product_id).count()

    def count_by_rating(self, rating: int) -> int:
        return self.session.query(Review).filter_by(rating=rating).count()

    @staticmethod
    def _newest_first(query) -> List[Review]:
        return query.order_by(Review.review_date.desc(), Review.id).all()
