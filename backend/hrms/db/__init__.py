"""Database Metadata - the SQLAlchemy Base shared by ORM models and migrations."""
