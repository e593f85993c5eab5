"""Users API: CRUD over user records served with FastAPI and SQLAlchemy."""

__version__ = "0.1.0"
