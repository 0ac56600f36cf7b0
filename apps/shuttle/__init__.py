"""Shuttle transport between accommodations and the camp."""
