"""Persistence of the checkout Order aggregate on relational storage."""

__version__ = "1.0.0"
