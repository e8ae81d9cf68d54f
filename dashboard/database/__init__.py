"""Async engine, ORM models and dashboard queries."""
