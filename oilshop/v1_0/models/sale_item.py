from sqlalchemy import Integer, Numeric, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

class SaleItem(Base):
    __tablename__ = "sale_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sale_id: Mapped[int] = mapped_column(ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    oil_id: Mapped[int] = mapped_column(ForeignKey("oils.id", ondelete="RESTRICT"), nullable=False, index=True)
    # English name of the oil when the sale was recorded
    oil_name_snapshot: Mapped[str] = mapped_column(String(120), nullable=False)
    quantity: Mapped[float] = mapped_column(Numeric(12, 3, asdecimal=False), nullable=False)
    line_amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)

    oil = relationship("Oil", back_populates="items")
    sale = relationship("Sale", back_populates="items")
