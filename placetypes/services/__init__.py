"""Request building, fetching and aggregation services."""
