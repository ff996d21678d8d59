"""Persistence: SQLAlchemy engine, ORM models and the record source repository."""
