"""SQLAlchemy Core schema, engine setup and id counters."""
