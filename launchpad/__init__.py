"""LaunchPad Application Package — catalog cache-aside layer and order pricing/reporting core.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
