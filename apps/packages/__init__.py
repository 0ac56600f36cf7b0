"""Activity packages and pricing rules."""
