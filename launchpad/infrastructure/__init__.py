"""Infrastructure Layer — database, cache and logging adapters.

Invariants:
    - Infrastructure implements the core/repository_protocols.py contracts
    - Backend exceptions never leak: mapped to StoreError / CacheUnavailableError

Design Decisions:
    - Thin adapters over raw clients, no retry logic (retries belong to the platform)
"""
