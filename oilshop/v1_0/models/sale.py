from datetime import datetime
from sqlalchemy import Integer, Numeric, String, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base
from .enums import SaleType, enum_values

class Sale(Base):
    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    total_amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    total_quantity: Mapped[float] = mapped_column(Numeric(12, 3, asdecimal=False), nullable=False)
    sale_type: Mapped[SaleType] = mapped_column(
        Enum(SaleType, name="sale_type", values_callable=enum_values),
        nullable=False,
    )
    note: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    items = relationship("SaleItem", back_populates="sale", cascade="all, delete-orphan", lazy="selectin")
