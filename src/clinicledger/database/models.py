"""SQLAlchemy models for clinicledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class FundAccount(Base):
    """One row per fund domain; ``version`` is bumped by every write."""

    __tablename__ = "fund_accounts"

    id = Column(Integer, primary_key=True)
    domain = Column(String(32), unique=True, nullable=False)
    version = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ExpenseCategory(Base):
    """Expense category model, scoped to a fund domain."""

    __tablename__ = "expense_categories"

    id = Column(Integer, primary_key=True)
    domain = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("domain", "name", name="uq_category_domain_name"),)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="expense_category")


class LedgerEntry(Base):
    """Append-only log of fund movements and income/expense transactions."""

    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True)
    domain = Column(String(32), nullable=False)
    transaction_no = Column(String(32), unique=True, nullable=True)
    entry_type = Column(String(16), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    purpose = Column(String(255), nullable=True)
    category = Column(String(255), nullable=True)
    expense_category_id = Column(Integer, ForeignKey("expense_categories.id"), nullable=True)
    reference_type = Column(String(64), nullable=True)
    reference_id = Column(Integer, nullable=True)
    description = Column(String(500), nullable=True)
    transaction_date = Column(Date, nullable=False)
    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_ledger_entries_domain_date", "domain", "transaction_date"),)

    # Relationships
    expense_category = relationship("ExpenseCategory", back_populates="entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are opened per operation and may run on worker threads
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
