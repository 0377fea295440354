import uuid
from decimal import Decimal

from sqlalchemy import String, Boolean, Date, DateTime, func, ForeignKey, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from finboard.db.base import Base

class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    type: Mapped[str] = mapped_column(String(32), index=True)
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    unit: Mapped[str] = mapped_column(String(16))
    price_per_unit: Mapped[Decimal] = mapped_column(Numeric(18, 4))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    auto_update: Mapped[bool] = mapped_column(Boolean, default=False)
    date: Mapped[Date] = mapped_column(Date, index=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())

    @property
    def total_value(self) -> Decimal:
        return Decimal(str(self.quantity)) * Decimal(str(self.price_per_unit))
