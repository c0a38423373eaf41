"""ORM and API models."""
