"""
Infrastructure Layer
====================

Adapters for external services (payment gateway, object storage, geocoding,
event bus, observability) behind small interfaces, plus the service container.
"""
