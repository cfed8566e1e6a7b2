"""
TMS: Transportation Management System server.

Shipment records behind a GraphQL API with token-based sessions.
"""

__version__ = "1.0.0"
