"""Draft Lab Backend - champion draft simulation API.

This package provides a hexagonal architecture implementation around the
``drafting`` engine for League of Legends champion select.

Layers:
- domain: Session read models and value objects
- application: Use cases and port interfaces
- infrastructure: Adapters for external services
- api: REST and WebSocket endpoints
"""

__version__ = "1.0.0"
