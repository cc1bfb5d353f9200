"""SQLAlchemy Declarative Base — shared metadata for every vault table.

Invariants:
    - All models inherit from Base
    - Index, unique, foreign-key and primary-key names follow one convention, so
      migrations and create_all agree on constraint names
    - Check constraints are named explicitly on each model (ck_<table>_<rule>)
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all vault ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
