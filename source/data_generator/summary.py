"""Identifiers created by one generation run."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GenerationSummary:
    """Ordered ids per entity type, used for verification and cleanup."""

    user_ids: Tuple[int, ...] = ()
    product_ids: Tuple[int, ...] = ()
    order_ids: Tuple[int, ...] = ()
    order_item_ids: Tuple[int, ...] = ()
    review_ids: Tuple[int, ...] = ()

    def __post_init__(self):
        # Store ids as tuples whatever sequence the caller passed
        for name in (
            "user_ids",
            "product_ids",
            "order_ids",
            "order_item_ids",
            "review_ids",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def user_count(self) -> int:
        return len(self.user_ids)

    @property
    def product_count(self) -> int:
        return len(self.product_ids)

    @property
    def order_count(self) -> int:
        return len(self.order_ids)

    @property
    def order_item_count(self) -> int:
        return len(self.order_item_ids)

    @property
    def review_count(self) -> int:
        return len(self.review_ids)

    @property
    def total_rows(self) -> int:
        return (
            self.user_count
            + self.product_count
            + self.order_count
            + self.order_item_count
            + self.review_count
        )

    def __str__(self) -> str:
        return (
            f"GenerationSummary(users={self.user_count}, "
            f"products={self.product_count}, orders={self.order_count}, "
            f"order_items={self.order_item_count}, reviews={self.review_count})"
        )
