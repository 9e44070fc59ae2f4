from enum import Enum


class NotificationKind(Enum):
    WELCOME = "welcome"
    ORDER_CONFIRMATION = "order_confirmation"
