"""
Infrastructure layer - Adapters for TeamWork.

This layer contains:
- In-memory repository and mail dispatcher stubs (``stubs``)
- Structured logging and request log context (``observability``)
- Prometheus metrics (``monitoring``)

IMPORT RULES:
- CAN import from: domain, application (ports)
- CANNOT import from: api
"""
