"""Accommodation places (own lodges and partner hotels)."""
