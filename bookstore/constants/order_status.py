from enum import Enum


class OrderStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


ALLOWED_TRANSITIONS = {
    "pending": ["confirmed", "shipped", "delivered", "cancelled"],
    "confirmed": ["shipped", "delivered", "cancelled"],
    "shipped": ["delivered", "cancelled"],
    "delivered": [],
    "cancelled": []
}

# statuses an admin can still move forward
UPDATABLE_STATUSES = ["pending", "confirmed", "shipped"]

STATUS_DISPLAY = {
    "pending": "Pending",
    "confirmed": "Confirmed",
    "shipped": "Shipped",
    "delivered": "Delivered",
    "cancelled": "Cancelled"
}

STATUS_COLOR = {
    "pending": "orange",
    "confirmed": "blue",
    "shipped": "purple",
    "delivered": "green",
    "cancelled": "red"
}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, [])
