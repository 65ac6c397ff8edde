"""Integration tests for components working together as a system.

Coverage:
    - Host API endpoints over ASGI transport
    - Engine talking to an in-process assistant app through the real HTTP client
"""
