"""API layer: the operations exposed to the gateway.

Key rules:

1. No SQLAlchemy imports - only call repo functions
2. Every gated operation calls require_user before touching a repo
3. Return Pydantic models, booleans or None only
4. Derived fields (progress, users, todos, task_list) are resolved here on read
"""
