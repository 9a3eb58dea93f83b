"""I/O helpers for the flow tree builder."""
