from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, Uuid

from app.core.db import Base
from app.core.time_formats import utc_now


class UtilityType(Base):
    """Lookup table for house (utility) expense types"""
    __tablename__ = "utility_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)


class CarExpenseType(Base):
    """Lookup table for car expense types"""
    __tablename__ = "car_expense_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)


class HouseExpense(Base):
    __tablename__ = "house_expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type_id = Column("utility_type_id", Integer, ForeignKey("utility_types.id"), nullable=False)
    amount = Column(Float, nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


class CarExpense(Base):
    __tablename__ = "car_expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type_id = Column("car_expense_type_id", Integer, ForeignKey("car_expense_types.id"), nullable=False)
    amount = Column(Float, nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
