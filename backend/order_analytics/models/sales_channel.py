from sqlalchemy import Column, String
from order_analytics.db.session import Base


class SalesChannel(Base):
    __tablename__ = "sales_channels"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
