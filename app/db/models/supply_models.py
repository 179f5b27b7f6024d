# /app/db/models/supply_models.py

"""
SQLAlchemy ORM models for the raw records: enrolled students and the
supply requests teachers submit for their grade.
"""

from sqlalchemy import Column, String, Integer, JSON

from ..base_class import Base


class Student(Base):
    id = Column(String, primary_key=True, index=True)
    first = Column(String, nullable=True)
    last = Column(String, nullable=True)
    # Indexed together with grade; this pair is the need join key.
    school = Column(String, index=True, nullable=True)
    grade = Column(String, index=True, nullable=True)


class SupplyRequest(Base):
    id = Column(String, primary_key=True, index=True)
    school = Column(String, index=True, nullable=True)
    grade = Column(String, index=True, nullable=True)
    teacher = Column(String, nullable=True)
    description = Column(String, nullable=True)
    item = Column(String, index=True, nullable=True)
    # An ordered list of strings, or NULL.
    properties = Column(JSON, nullable=True)
    quantity = Column(Integer, nullable=True)
    notes = Column(String, nullable=True)
