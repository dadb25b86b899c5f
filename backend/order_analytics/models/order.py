import enum
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship
from order_analytics.db.session import Base


class OrderStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    archived = "archived"
    canceled = "canceled"
    requires_action = "requires_action"


order_discounts = Table(
    "order_discounts",
    Base.metadata,
    Column("order_id", String, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True),
    Column("discount_id", String, ForeignKey("discounts.id", ondelete="CASCADE"), primary_key=True),
)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    created_at = Column(DateTime, nullable=False, index=True)  # stored as naive UTC
    status = Column(String, nullable=False, index=True)
    currency_code = Column(String(3), nullable=False)
    # money columns are integers in minor currency units
    total = Column(Integer, nullable=False, default=0)
    shipping_total = Column(Integer, nullable=False, default=0)
    tax_total = Column(Integer, nullable=False, default=0)
    region_id = Column(String, ForeignKey("regions.id"), nullable=True)
    sales_channel_id = Column(String, ForeignKey("sales_channels.id"), nullable=True)

    region = relationship("Region")
    sales_channel = relationship("SalesChannel")
    payments = relationship("Payment", back_populates="order", order_by="Payment.id")
    refunds = relationship("Refund", back_populates="order")
    discounts = relationship("Discount", secondary=order_discounts, order_by="Discount.id")
