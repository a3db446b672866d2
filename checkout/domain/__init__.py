"""Checkout domain: aggregates, value objects and repository contracts."""
