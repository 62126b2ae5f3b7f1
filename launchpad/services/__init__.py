"""Services Layer — async orchestration around the pure core.

Invariants:
    - Services receive their stores and cache by constructor injection
    - Validation (core) runs before any IO
"""
