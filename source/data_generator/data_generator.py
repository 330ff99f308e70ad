"""Seeded generator for relationship-consistent users, products, orders, order items, and reviews."""

import random
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from string import ascii_uppercase
from typing import Dict, List, Optional, Sequence, Set, Tuple
from faker import Faker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dao.dao_factory import DaoFactory
from data_generator.summary import GenerationSummary
from data_generator.uniqueness import draw_unique
from utilities import config
from utilities.database import create_db_engine, create_session_factory, execute_in_transaction
from utilities.errors import DataGenerationError, MissingParentDataError
from utilities.logger import Logger
from utilities.models import (
    ORDER_STATUSES,
    PRODUCT_CATEGORIES,
    SHIPPED_STATUSES,
    Order,
    OrderItem,
    Product,
    Review,
    User,
)
from utilities.tools import setup_database, wait_for_database

# Set up logger
logger = Logger.get_logger(__name__)

CENTS = Decimal("0.01")

ORDER_NUMBER_PREFIX = "ORD-"

# Product name corpus: adjective + material + noun
PRODUCT_ADJECTIVES = (
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Enormous", "Mediocre",
    "Synergistic", "Heavy Duty", "Lightweight", "Aerodynamic", "Durable",
)
PRODUCT_MATERIALS = (
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Leather", "Silk", "Wool", "Linen", "Marble", "Iron", "Bronze", "Copper",
    "Aluminum", "Paper",
)
PRODUCT_NOUNS = (
    "Chair", "Car", "Computer", "Gloves", "Pants", "Shirt", "Table", "Shoes",
    "Hat", "Plate", "Knife", "Bottle", "Coat", "Lamp", "Keyboard", "Bag",
    "Bench", "Clock", "Watch", "Wallet",
)


class DataGenerator:
    """
    Class to generate relationship-consistent test data through the DAO layer.

    All randomness comes from one random.Random and one Faker instance seeded
    with the same value, so equal seeds reproduce equal field values.
    """

    def __init__(
        self,
        session: Session,
        seed: Optional[int] = None,
        reviews_per_user: int = config.REVIEWS_PER_USER,
        max_reviews: int = config.MAX_REVIEWS,
        max_unique_attempts: int = config.MAX_UNIQUE_ATTEMPTS,
        reference_time: Optional[datetime] = None,
    ):
        self.session = session
        self.seed = seed
        # Every generated date is drawn relative to this instant
        self.reference_time = reference_time or datetime.now()
        self.reviews_per_user = reviews_per_user
        self.max_reviews = max_reviews
        self.max_unique_attempts = max_unique_attempts

        self.random = random.Random(seed)
        self.faker = Faker()
        if seed is not None:
            self.faker.seed_instance(seed)

        self.daos = DaoFactory(session)

        # Rejection sets shared by every phase of this generator
        self._used_usernames: Set[str] = set()
        self._used_emails: Set[str] = set()
        self._used_skus: Set[str] = set()
        self._used_order_numbers: Set[str] = set()
        self._used_review_pairs: Set[Tuple[int, int]] = set()

    # Orchestration

    def generate_complete_test_data(
        self,
        user_count: int,
        product_count: int,
        order_count: int,
        review_count: Optional[int] = None,
    ) -> GenerationSummary:
        """Generate users, products, orders, order items and reviews in one transaction.

        The review count defaults to min(user_count * reviews_per_user,
        max_reviews). Any failure rolls back every phase and propagates.
        """
        if review_count is None:
            review_count = self.default_review_count(user_count)

        logger.info(
            f"Generating test data: {user_count} users, {product_count} products, "
            f"{order_count} orders, up to {review_count} reviews"
        )

        def generate_all() -> GenerationSummary:
            user_ids = [user.id for user in self.generate_users(user_count)]
            product_ids = [
                product.id for product in self.generate_products(product_count)
            ]
            order_ids = [
                order.id for order in self.generate_orders(order_count, user_ids)
            ]
            order_item_ids = [
                item.id for item in self.generate_order_items(order_ids, product_ids)
            ]
            review_ids = [
                review.id
                for review in self.generate_reviews(review_count, user_ids, product_ids)
            ]
            return GenerationSummary(
                user_ids=user_ids,
                product_ids=product_ids,
                order_ids=order_ids,
                order_item_ids=order_item_ids,
                review_ids=review_ids,
            )

        try:
            summary = execute_in_transaction(self.session, generate_all)
        except (SQLAlchemyError, DataGenerationError) as e:
            logger.error(f"Failed to generate test data: {e}")
            raise

        logger.info(f"Test data generated: {summary}")
        return summary

    def default_review_count(self, user_count: int) -> int:
        return min(user_count * self.reviews_per_user, self.max_reviews)

    def cleanup_test_data(self, summary: GenerationSummary) -> int:
        """Delete the summary's rows in reverse dependency order in one transaction.

        Ids that no longer exist are skipped. Returns the number of rows removed.
        """
        logger.info(f"Cleaning up test data: {summary}")

        def remove_all() -> int:
            removed = 0
            for dao, ids in self._cleanup_plan(summary):
                for entity_id in ids:
                    if dao.delete(entity_id):
                        removed += 1
            return removed

        try:
            removed = execute_in_transaction(self.session, remove_all)
        except SQLAlchemyError as e:
            logger.error(f"Failed to clean up test data: {e}")
            raise

        skipped = summary.total_rows - removed
        logger.info(f"Cleanup completed: {removed} rows removed, {skipped} already absent")
        return removed

    def count_remaining(self, summary: GenerationSummary) -> Dict[str, int]:
        """Count, per table, how many of the summary's ids still exist."""
        remaining = {}
        for dao, ids in self._cleanup_plan(summary):
            model = dao.model
            remaining[model.__tablename__] = (
                self.session.query(model).filter(model.id.in_(ids)).count()
                if ids
                else 0
            )
        return remaining

    def _cleanup_plan(self, summary: GenerationSummary):
        return (
            (self.daos.reviews, summary.review_ids),
            (self.daos.order_items, summary.order_item_ids),
            (self.daos.orders, summary.order_ids),
            (self.daos.products, summary.product_ids),
            (self.daos.users, summary.user_ids),
        )

    # Entity factories

    def generate_users(self, count: int) -> List[User]:
        """Generate a new set of users"""
        users = []
        for _ in range(count):
            user = User(
                username=draw_unique(
                    self.faker.user_name,
                    self._used_usernames,
                    "username",
                    self.max_unique_attempts,
                ),
                email=draw_unique(
                    self.faker.email,
                    self._used_emails,
                    "email",
                    self.max_unique_attempts,
                ),
                first_name=self.faker.first_name(),
                last_name=self.faker.last_name(),
                date_of_birth=self._date_of_birth(minimum_age=18, maximum_age=65),
                phone_number=self.faker.phone_number(),
                is_active=True,
            )
            users.append(self.daos.users.create(user))

        logger.debug(f"Generated {len(users)} users")
        return users

    def generate_products(self, count: int) -> List[Product]:
        """Generate a new set of products"""
        products = []
        for _ in range(count):
            stock_quantity = self.random.randint(0, 500)
            product = Product(
                name=self._product_name(),
                description=self.faker.paragraph(nb_sentences=3),
                price=self._money(10, 1000),
                category=self.random.choice(PRODUCT_CATEGORIES),
                sku=draw_unique(
                    self._sku, self._used_skus, "SKU", self.max_unique_attempts
                ),
                stock_quantity=stock_quantity,
                # In-stock products may still be switched off by hand
                is_available=stock_quantity > 0 and self.faker.boolean(),
            )
            products.append(self.daos.products.create(product))

        logger.debug(f"Generated {len(products)} products")
        return products

    def generate_orders(self, count: int, user_ids: Sequence[int]) -> List[Order]:
        """Generate orders owned by the given users"""
        if count > 0 and not user_ids:
            raise MissingParentDataError("orders", "users")

        orders = []
        for _ in range(count):
            status = self.random.choice(ORDER_STATUSES)
            order_date = self._past_datetime(days=90)
            shipped_date = None
            if status in SHIPPED_STATUSES:
                shipped_date = order_date + timedelta(days=self.random.randint(1, 5))

            order = Order(
                user_id=self.random.choice(user_ids),
                order_number=draw_unique(
                    self._order_number,
                    self._used_order_numbers,
                    "order number",
                    self.max_unique_attempts,
                ),
                total_amount=self._money(50, 2000),
                status=status,
                order_date=order_date,
                shipped_date=shipped_date,
                delivery_address=self.faker.address().replace("\n", ", "),
            )
            orders.append(self.daos.orders.create(order))

        logger.debug(f"Generated {len(orders)} orders")
        return orders

    def generate_order_items(
        self, order_ids: Sequence[int], product_ids: Sequence[int]
    ) -> List[OrderItem]:
        """Generate 1-5 line items for every order.

        Products are not repeated within an order until every product has
        been used for it; after that repetition is allowed.
        """
        if order_ids and not product_ids:
            raise MissingParentDataError("order items", "products")

        items = []
        for order_id in order_ids:
            used_product_ids: Set[int] = set()
            for _ in range(self.random.randint(1, 5)):
                product_id = self.random.choice(product_ids)
                while (
                    product_id in used_product_ids
                    and len(used_product_ids) < len(product_ids)
                ):
                    product_id = self.random.choice(product_ids)
                used_product_ids.add(product_id)

                quantity = self.random.randint(1, 5)
                unit_price = self._money(10, 500)
                item = OrderItem(
                    order_id=order_id,
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=unit_price * quantity,
                )
                items.append(self.daos.order_items.create(item))

        logger.debug(f"Generated {len(items)} order items")
        return items

    def generate_reviews(
        self, count: int, user_ids: Sequence[int], product_ids: Sequence[int]
    ) -> List[Review]:
        """Generate reviews, at most one per (user, product) pair.

        Pairs already reviewed through this generator are never drawn again,
        and the count is capped at the number of pairs still free.
        """
        free_pairs = [
            (u, p)
            for u in user_ids
            for p in product_ids
            if (u, p) not in self._used_review_pairs
        ]
        pair_space = len(user_ids) * len(product_ids)
        count = min(count, len(free_pairs))

        if count * 2 > len(free_pairs) or len(free_pairs) * 2 < pair_space:
            # Dense request or mostly used space: sample free pairs directly
            pairs = self.random.sample(free_pairs, count)
            self._used_review_pairs.update(pairs)
        else:

            def draw_pair() -> Tuple[int, int]:
                return self.random.choice(user_ids), self.random.choice(product_ids)

            pairs = [
                draw_unique(
                    draw_pair,
                    self._used_review_pairs,
                    "review pair",
                    self.max_unique_attempts,
                )
                for _ in range(count)
            ]

        reviews = []
        for user_id, product_id in pairs:
            review = Review(
                user_id=user_id,
                product_id=product_id,
                rating=self.random.randint(1, 5),
                title=self.faker.sentence(nb_words=5),
                comment=self.faker.paragraph(nb_sentences=2),
                review_date=self._past_datetime(days=30),
                is_verified_purchase=self.faker.boolean(),
            )
            reviews.append(self.daos.reviews.create(review))

        logger.debug(f"Generated {len(reviews)} reviews")
        return reviews

    # Field helpers

    def _money(self, low: int, high: int) -> Decimal:
        amount = Decimal(str(self.random.uniform(low, high)))
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)

    def _past_datetime(self, days: int) -> datetime:
        return self.faker.date_time_between(
            start_date=self.reference_time - timedelta(days=days),
            end_date=self.reference_time,
        )

    def _date_of_birth(self, minimum_age: int, maximum_age: int) -> date:
        today = self.reference_time.date()
        return self.faker.date_between_dates(
            _years_before(today, maximum_age + 1) + timedelta(days=1),
            _years_before(today, minimum_age),
        )

    def _product_name(self) -> str:
        return " ".join(
            (
                self.random.choice(PRODUCT_ADJECTIVES),
                self.random.choice(PRODUCT_MATERIALS),
                self.random.choice(PRODUCT_NOUNS),
            )
        )

    def _sku(self) -> str:
        return self.faker.bothify("???-########", letters=ascii_uppercase)

    def _order_number(self) -> str:
        return ORDER_NUMBER_PREFIX + self.faker.numerify("########")


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def main() -> None:
    """Generate one dataset against the configured database"""
    engine = create_db_engine(config.DB_URL)

    # Wait for the database to be available
    if not wait_for_database(
        engine, max_retries=config.DB_MAX_RETRIES, delay=config.DB_RETRY_DELAY
    ):
        return

    # Set up database
    setup_database(engine=engine)

    session_factory = create_session_factory(engine)
    with session_factory() as session:
        data_generator = DataGenerator(session, seed=config.get_seed())
        data_generator.generate_complete_test_data(
            user_count=config.GENERATOR_USERS,
            product_count=config.GENERATOR_PRODUCTS,
            order_count=config.GENERATOR_ORDERS,
        )


if __name__ == "__main__":
    main()
