"""Database models for the pick list reporting backend."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .config import settings


AUTO_INCREMENT_PK = Integer().with_variant(BigInteger, "postgresql")


class Base(DeclarativeBase):
    """Declarative base that is aware of the configured schema."""

    __abstract__ = True


class SchemaMixin:
    """Mixin ensuring tables are created within the configured schema."""

    _schema = settings.db_schema.strip() if settings.db_schema else ""
    __table_args__ = {"schema": _schema} if _schema else {}


class Label(Base, SchemaMixin):
    """Shipping label line owned by the label ingestion pipeline.

    Each row records that ``quantity`` units of ``product_name`` leave
    ``store_name`` with ``courier_name`` on ``label_date``. The reporting
    code only ever reads this table.
    """

    __tablename__ = "labels"
    __table_args__ = (
        Index("idx_labels_store", "store_name"),
        Index("idx_labels_courier", "courier_name"),
        Index("idx_labels_label_date", "label_date"),
        SchemaMixin.__table_args__ if SchemaMixin.__table_args__ else {},
    )

    id: Mapped[int] = mapped_column(AUTO_INCREMENT_PK, primary_key=True, autoincrement=True)
    label_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    store_name: Mapped[str] = mapped_column(String(255), nullable=False)
    courier_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_name: Mapped[str] = mapped_column(Text, nullable=False)
    sku: Mapped[str | None] = mapped_column(String(255), nullable=True)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )
    order_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    label_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


def ensure_labels_table(bind: Engine | Connection) -> None:
    """Create the labels table when it does not exist.

    Production databases receive the table from the label ingestion
    service. Local and test databases may start empty, so ``checkfirst``
    keeps the call idempotent.
    """

    Label.__table__.create(bind=bind, checkfirst=True)

