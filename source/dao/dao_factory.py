"""One place to build all DAOs over a shared session."""

from sqlalchemy.orm import Session

from dao.order_dao import OrderDao
from dao.order_item_dao import OrderItemDao
from dao.product_dao import ProductDao
from dao.review_dao import ReviewDao
from dao.user_dao import UserDao


class DaoFactory:
    """
    Holds one DAO per entity, all bound to the same session and transaction.
    """

    def __init__(self, session: Session):
        self.session = session
        self.users = UserDao(session)
        self.products = ProductDao(session)
        self.orders = OrderDao(session)
        self.order_items = OrderItemDao(session)
        self.reviews = ReviewDao(session)
