"""HTTP API for TMS."""
