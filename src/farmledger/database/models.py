"""SQLAlchemy models for the farmledger database."""

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
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class FarmSettings(Base):
    """Single-row table holding farm-wide settings."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    farm_name = Column(String, nullable=False)
    currency = Column(String(3), nullable=False)


class TransactionCategory(Base):
    """Configured category name for income or expense transactions."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (UniqueConstraint("kind", "name", name="uq_category_kind_name"),)


class Crop(Base):
    """Crop model."""

    __tablename__ = "crops"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    planting_date = Column(Date, nullable=False)
    estimated_harvest_date = Column(Date, nullable=False)
    actual_harvest_date = Column(Date, nullable=True)
    area = Column(Numeric(12, 3), nullable=False)
    area_unit = Column(String, nullable=False)
    yield_amount = Column(Numeric(12, 3), nullable=True)
    yield_unit = Column(String, nullable=True)
    notes = Column(String, nullable=True)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    # No foreign key: a crop may be deleted while transactions still point at it
    crop_id = Column(Integer, nullable=True)


class Equipment(Base):
    """Equipment model."""

    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    purchase_date = Column(Date, nullable=False)
    model = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    # Relationships
    maintenance_logs = relationship(
        "MaintenanceLog",
        back_populates="equipment",
        cascade="all, delete-orphan",
    )


class MaintenanceLog(Base):
    """Maintenance log model."""

    __tablename__ = "maintenance_logs"

    id = Column(Integer, primary_key=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)

    # Relationships
    equipment = relationship("Equipment", back_populates="maintenance_logs")


class Todo(Base):
    """To-do model."""

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True)
    task = Column(String, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    message = Column(String, nullable=False)
    timestamp = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    seen = Column(Boolean, default=False, nullable=False)
    link = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url in MEMORY_URLS:
        # One shared connection, otherwise every connection sees an empty database
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
