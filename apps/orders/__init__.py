"""Orders and their billable activity items."""
