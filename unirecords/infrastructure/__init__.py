"""Infrastructure: record store persistence (SQLAlchemy async)."""
