#app/data/models/product.py
import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text

from app.data.database import Base


class ProductStatus(str, enum.Enum):
    APPROVED = "approved"
    PENDING = "pending"
    DISAPPROVED = "disapproved"


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    artisan_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    material = Column(String, nullable=False)
    image = Column(String, nullable=False)
    description = Column(Text, nullable=False)

    old_price = Column(Numeric(10, 2), nullable=False)
    new_price = Column(Numeric(10, 2), nullable=False)  # cena sprzedazy, po niej liczymy zamowienie
    quantity = Column(Integer, nullable=False, default=1)

    status = Column(String, nullable=False, default=ProductStatus.PENDING.value)
    is_valid = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),)
