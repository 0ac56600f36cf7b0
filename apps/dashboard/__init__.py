"""Back-office dashboard: revenue, order and customer aggregates."""
