"""Grouped key/value settings persisted with SQLAlchemy and cached in memory."""
