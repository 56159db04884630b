from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String

from .database import Base

# SQLAlchemy model for the seeded product transactions
class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String, default="")
    description = Column(String, default="")
    price = Column(Float)
    date_of_sale = Column(DateTime) # naive UTC
    category = Column(String)
    sold = Column(Boolean, default=False)
    image = Column(String, nullable=True)
