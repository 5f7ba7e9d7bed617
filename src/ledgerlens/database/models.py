"""SQLAlchemy models for ledgerlens database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Workspace(Base):
    """Workspace model."""

    __tablename__ = "workspaces"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    categories = relationship("Category", back_populates="workspace", cascade="all, delete-orphan")
    ledgers = relationship("Ledger", back_populates="workspace", cascade="all, delete-orphan")
    recurring_patterns = relationship(
        "RecurringPattern", back_populates="workspace", cascade="all, delete-orphan"
    )


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("workspace_id", "name", name="uq_workspace_category_name"),)

    # Relationships
    workspace = relationship("Workspace", back_populates="categories")
    patterns = relationship("CategoryPattern", back_populates="category", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="category")


class CategoryPattern(Base):
    """Keyword/regex pattern assigning one bank's transactions to a category."""

    __tablename__ = "category_patterns"

    id = Column(Integer, primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    bank_id = Column(String, nullable=False)
    pattern = Column(String, nullable=False)
    priority = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_category_patterns_bank_category", "bank_id", "category_id"),)

    # Relationships
    category = relationship("Category", back_populates="patterns")


class Ledger(Base):
    """Imported bank statement model."""

    __tablename__ = "ledgers"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    filename = Column(String, nullable=False)
    bank_id = Column(String, nullable=False)
    file_hash = Column(String(64), nullable=False)
    period_start = Column(String(10), nullable=True)
    period_end = Column(String(10), nullable=True)
    uploaded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # A statement may be imported once per workspace
    __table_args__ = (UniqueConstraint("workspace_id", "file_hash", name="uq_workspace_file_hash"),)

    # Relationships
    workspace = relationship("Workspace", back_populates="ledgers")
    transactions = relationship("Transaction", back_populates="ledger", cascade="all, delete-orphan")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    ledger_id = Column(Integer, ForeignKey("ledgers.id"), nullable=False)
    # ISO date text; kept as printed when a statement date could not be normalized
    date = Column(String(10), nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    balance = Column(Numeric(12, 2), nullable=True)
    direction = Column(String(7), nullable=False)
    raw_text = Column(String, nullable=True)
    value_date = Column(String(10), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    is_manual = Column(Boolean, default=False, nullable=False)
    needs_review = Column(Boolean, default=False, nullable=False)
    recurring_pattern_id = Column(Integer, ForeignKey("recurring_patterns.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("ix_transactions_ledger_date", "ledger_id", "date"),
        Index("ix_transactions_recurring", "recurring_pattern_id"),
    )

    # Relationships
    ledger = relationship("Ledger", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")
    recurring_pattern = relationship("RecurringPattern", back_populates="transactions")


class RecurringPattern(Base):
    """Detected recurring transaction pattern model."""

    __tablename__ = "recurring_patterns"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    description_pattern = Column(String, nullable=False)
    frequency = Column(String(7), nullable=False)
    direction = Column(String(7), default="expense", nullable=False)
    avg_amount = Column(Numeric(12, 2), nullable=False)
    occurrence_count = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="recurring_patterns")
    # Back-reference only: deleting a pattern unlinks its transactions
    transactions = relationship("Transaction", back_populates="recurring_pattern")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
