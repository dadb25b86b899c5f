from sqlalchemy import Column, String
from order_analytics.db.session import Base


class Discount(Base):
    __tablename__ = "discounts"

    id = Column(String, primary_key=True)
    code = Column(String, nullable=False, unique=True)
