"""Business logic: ETags, failures, to-do commands and queries."""
