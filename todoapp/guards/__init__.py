"""Route-level precondition guards."""
