"""Persistence adapters for identity data."""
