from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, Text
from sqlalchemy.orm import relationship

from app.data.database import Base


class OrderItemModel(Base):
    """
    Zamrozona kopia produktu z chwili zakupu.
    product_id bez FK: produkt moze zostac usuniety, zamowienie zostaje.
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, nullable=True)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    material = Column(String, nullable=False)
    image = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    old_price = Column(Numeric(10, 2), nullable=False)
    new_price = Column(Numeric(10, 2), nullable=False)

    quantity = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="items")
