"""hexstack CLI commands."""
