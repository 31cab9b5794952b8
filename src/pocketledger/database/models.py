"""SQLAlchemy models for pocketledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Two fractional digits for every monetary column
MONEY = Numeric(15, 2)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """Ledger owner model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    open_id = Column(String(64), unique=True, nullable=False)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    role = Column(String(16), default="user", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    last_signed_in = Column(DateTime, default=_utcnow, nullable=False)


class Account(Base):
    """Financial account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    account_type = Column(String(16), nullable=False)
    balance = Column(MONEY, default=0, nullable=False)
    currency = Column(String(3), default="BRL", nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Transaction category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category_type = Column(String(16), nullable=False)
    color = Column(String(7), default="#3b82f6", nullable=True)
    icon = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")
    budgets = relationship("Budget", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    transaction_type = Column(String(16), nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(String(500), nullable=True)
    tags = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_frequency = Column(String(16), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")


class Budget(Base):
    """Monthly budget model.

    There is no ``spent`` column: spending is summed from transactions
    whenever a budget is read.
    """

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    limit = Column(MONEY, nullable=False)
    period = Column(String(20), default="monthly", nullable=False)
    month = Column(String(7), nullable=False)
    alert_threshold = Column(Integer, default=80, nullable=False)
    alerted_status = Column(String(16), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "category_id", "month", name="uq_budget_user_category_month"),
    )

    # Relationships
    category = relationship("Category", back_populates="budgets")


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    notification_type = Column(String(32), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    related_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    target_amount = Column(MONEY, nullable=False)
    current_amount = Column(MONEY, default=0, nullable=False)
    deadline = Column(Date, nullable=True)
    category = Column(String(100), nullable=True)
    state = Column(String(16), default="active", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    The engine connects lazily; tables are created by ``create_schema``.
    """
    engine = create_engine(database_url, echo=False)
    return sessionmaker(bind=engine)


def create_schema(session_factory: sessionmaker[Session]) -> None:
    """Create all tables on the factory's engine."""
    Base.metadata.create_all(session_factory.kw["bind"])
