"""Reference steam table."""
