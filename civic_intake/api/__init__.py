"""HTTP API for complaint intake."""
