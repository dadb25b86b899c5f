from sqlalchemy import Column, String
from order_analytics.db.session import Base


class Region(Base):
    __tablename__ = "regions"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    currency_code = Column(String(3), nullable=False)
