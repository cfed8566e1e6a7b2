"""Core configuration, security and authorization for TMS."""
