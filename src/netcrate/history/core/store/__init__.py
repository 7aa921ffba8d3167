"""File-backed persistence for execution results."""
