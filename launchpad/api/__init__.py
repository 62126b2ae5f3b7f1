"""API Layer — application shell: health probes, error handlers, dependency providers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Domain endpoints live in the request layer; this package only wires the core into it
"""
