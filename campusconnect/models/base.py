"""Declarative base for the SQLAlchemy tables."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
