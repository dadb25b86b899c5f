from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from order_analytics.db.session import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String, primary_key=True)
    order_id = Column(String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    provider_id = Column(String, nullable=False)  # e.g. "manual", "stripe"
    amount = Column(Integer, nullable=False, default=0)

    order = relationship("Order", back_populates="payments")
