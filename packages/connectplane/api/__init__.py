"""Wire schemas for transport adapters."""
