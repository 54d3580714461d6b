"""SQLAlchemy models for the doublebook store."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    code = Column(String(256), primary_key=True)
    name = Column(String(256), nullable=False)
    description = Column(String(256), nullable=False)
    account_type = Column(String(16), nullable=False)
    parent_code = Column(String(256), ForeignKey("accounts.code"), nullable=True)
    normally = Column(String(8), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Account", remote_side=[code], backref="children")
    journal_lines = relationship("JournalLine", back_populates="account")


class Journal(Base):
    """Journal model."""

    __tablename__ = "journals"

    id = Column(String(36), primary_key=True)
    name = Column(String(256), unique=True, nullable=False)
    description = Column(String(256), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship(
        "JournalEntry",
        back_populates="journal",
        order_by="JournalEntry.position",
        cascade="all, delete-orphan",
    )


class JournalEntry(Base):
    """Journal entry model. Rows are only ever inserted."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    journal_id = Column(String(36), ForeignKey("journals.id"), nullable=False)
    entry_id = Column(String(256), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(String(256), nullable=False)
    date = Column(Date, nullable=False)
    reference = Column(String(256), nullable=False)
    posted_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("journal_id", "entry_id", name="uq_journal_entry_id"),
    )

    # Relationships
    journal = relationship("Journal", back_populates="entries")
    lines = relationship(
        "JournalLine",
        back_populates="entry",
        order_by="JournalLine.position",
        cascade="all, delete-orphan",
    )


class JournalLine(Base):
    """Journal line model."""

    __tablename__ = "journal_lines"

    id = Column(String(36), primary_key=True)
    entry_pk = Column(Integer, ForeignKey("journal_entries.id"), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(String(256), nullable=False)
    account_code = Column(String(256), ForeignKey("accounts.code"), nullable=False)
    debit = Column(Numeric(15, 2), nullable=False, default=0)
    credit = Column(Numeric(15, 2), nullable=False, default=0)

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("Account", back_populates="journal_lines")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
