"""
API layer - FastAPI routes and HTTP concerns for TeamWork.

This layer contains:
- FastAPI route definitions
- Request/Response models and adapters
- HTTP middleware
- Mapping of domain errors to RFC 7807 problems

IMPORT RULES:
- CAN import from: application, domain, bootstrap
- CANNOT import from: infrastructure directly (except observability and monitoring)
- Services are resolved through the bootstrap container
"""

__all__: list[str] = []
