"""
TeamWork - Collaborative workspace core

Coordinates shared workspaces: membership and roles, task and issue
lifecycles, invitation onboarding and per-user notification fan-out.

Core Rules:
- Every mutating operation passes the access gate first
- Lifecycle operations return the domain events they emitted
- Notifications are best-effort and never fail the triggering action
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
