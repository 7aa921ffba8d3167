"""Storage, query and maintenance for the result history."""
