from bookstore.models.user import User
from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem

# add ALL models here
__all__ = ["User", "Book", "Order", "OrderItem"]
