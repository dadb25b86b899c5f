from .order import Order, OrderStatus, order_discounts
from .refund import Refund
from .payment import Payment
from .region import Region
from .sales_channel import SalesChannel
from .discount import Discount

__all__ = [
    "Order","OrderStatus","order_discounts","Refund","Payment","Region","SalesChannel","Discount"
]
