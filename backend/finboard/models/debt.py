import uuid
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, func, ForeignKey, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from finboard.db.base import Base
from finboard.utils.timezone import utcnow


class Debt(Base):
    __tablename__ = "debts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(128))
    creditor: Mapped[str] = mapped_column(String(128), default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    due_date: Mapped[Date | None] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(16), default="pending")
    type: Mapped[str] = mapped_column(String(16), default="short")
    date: Mapped[Date] = mapped_column(Date, index=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())

    amount_history: Mapped[list["DebtAmountHistory"]] = relationship(
        back_populates="debt",
        cascade="all, delete-orphan",
        order_by="DebtAmountHistory.logged_at",
    )


class DebtAmountHistory(Base):
    __tablename__ = "debt_amount_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    debt_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("debts.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    note: Mapped[str | None] = mapped_column(String(256), nullable=True)
    logged_at: Mapped[DateTime] = mapped_column(DateTime, default=utcnow, index=True)

    debt: Mapped[Debt] = relationship(back_populates="amount_history")
