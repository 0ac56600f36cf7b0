"""Editable site settings and the public camp profile."""
