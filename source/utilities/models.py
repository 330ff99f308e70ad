"""SQLAlchemy ORM models for users, products, orders, order items, and reviews."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

ORDER_STATUSES = ("PENDING", "CONFIRMED", "SHIPPED", "DELIVERED", "CANCELLED")

# Statuses that require a shipped date
SHIPPED_STATUSES = ("SHIPPED", "DELIVERED")

PRODUCT_CATEGORIES = (
    "Electronics",
    "Furniture",
    "Kitchen",
    "Sports",
    "Books",
    "Clothing",
    "Home & Garden",
    "Toys",
)


class User(Base):
    """
    User model representing a registered shop customer.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(100), nullable=False, unique=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date)
    phone_number = Column(String(30))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationship with orders and reviews
    orders = relationship("Order", back_populates="user", passive_deletes=True)
    reviews = relationship("Review", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


class Product(Base):
    """
    Product model representing items available for purchase.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    sku = Column(String(50), nullable=False, unique=True, index=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationship with order items and reviews
    order_items = relationship(
        "OrderItem", back_populates="product", passive_deletes=True
    )
    reviews = relationship("Review", back_populates="product", passive_deletes=True)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price='{self.price}')>"


class Order(Base):
    """
    Order model representing user purchases.
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order_number = Column(String(50), nullable=False, unique=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(*ORDER_STATUSES, name="order_status"),
        nullable=False,
        default="PENDING",
        index=True,
    )
    order_date = Column(DateTime, nullable=False, server_default=func.now())
    shipped_date = Column(DateTime, nullable=True)
    delivery_address = Column(Text)

    # Relationship with user and items
    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", passive_deletes=True)

    def __repr__(self):
        return f"<Order(id={self.id}, number='{self.order_number}', status='{self.status}', total=${self.total_amount})>"


class OrderItem(Base):
    """
    OrderItem model representing individual items within an order.
    """

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Relationship with order and product
    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")

    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"


class Review(Base):
    """
    Review model representing a user's rating of a product.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="review_rating_range"),
        UniqueConstraint("user_id", "product_id", name="unique_user_product_review"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating = Column(Integer, nullable=False, index=True)
    title = Column(String(200))
    comment = Column(Text)
    review_date = Column(DateTime, server_default=func.now())
    is_verified_purchase = Column(Boolean, nullable=False, default=False)

    # Relationship with user and product
    user = relationship("User", back_populates="reviews")
    product = relationship("Product", back_populates="reviews")

    def __repr__(self):
        return f"<Review(id={self.id}, user_id={self.user_id}, product_id={self.product_id}, rating={self.rating})>"


# Dependency order used for inserts; deletes run in reverse
TABLES_IN_DEPENDENCY_ORDER = ("users", "products", "orders", "order_items", "reviews")
