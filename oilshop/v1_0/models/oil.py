from datetime import datetime
from sqlalchemy import String, Text, Numeric, DateTime, Enum, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base
from .enums import OilStatus, OilUnit, enum_values

class Oil(Base):
    __tablename__ = "oils"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name_en: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    name_my: Mapped[str] = mapped_column(String(120), nullable=False)
    description_en: Mapped[str] = mapped_column(Text, nullable=False)
    description_my: Mapped[str] = mapped_column(Text, nullable=False)
    price_per_unit: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
    )
    unit: Mapped[OilUnit] = mapped_column(
        Enum(OilUnit, name="oil_unit", values_callable=enum_values),
        nullable=False,
        default=OilUnit.VISS,
        server_default=text("'viss'"),
    )
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[OilStatus] = mapped_column(
        Enum(OilStatus, name="oil_status", values_callable=enum_values),
        nullable=False,
        default=OilStatus.ACTIVE,
        server_default=text("'ACTIVE'"),
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    items = relationship("SaleItem", back_populates="oil")

    @property
    def is_active(self) -> bool:
        return self.status == OilStatus.ACTIVE
