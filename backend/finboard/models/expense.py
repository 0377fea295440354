import uuid
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, func, ForeignKey, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from finboard.db.base import Base

class Expense(Base):
    __tablename__ = "expenses"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(128))
    category: Mapped[str] = mapped_column(String(64), default="other")
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    date: Mapped[Date] = mapped_column(Date, index=True)
    status: Mapped[str] = mapped_column(String(16), default="pending")
    type: Mapped[str] = mapped_column(String(16), default="variable")
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
