# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here makes sure
# Base.metadata knows every table before create_all() runs.

from .base_class import Base

from .models.supply_models import Student, SupplyRequest
