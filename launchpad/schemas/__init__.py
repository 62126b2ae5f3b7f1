"""Pydantic Schemas — wire shapes validated at system boundaries.

Invariants:
    - Cache payloads are versioned schemas, decoded strictly

Design Decisions:
    - Separate from models: schemas are wire contracts, models are persistence
"""
