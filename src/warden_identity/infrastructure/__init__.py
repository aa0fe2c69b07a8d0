"""Infrastructure adapters for identity (persistence, email)."""
