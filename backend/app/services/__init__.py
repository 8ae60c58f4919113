"""Services Layer — multi-step operations built on the store (contact export)."""
