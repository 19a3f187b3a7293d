"""Persistence layer: ORM models and async sessions."""
