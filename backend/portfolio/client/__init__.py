"""API Client — async gateway used by front-end tooling and scripts.

Invariants:
    - Client code never imports from api/, services/ or infrastructure/

Design Decisions:
    - Empty __init__.py: import from client.api_client / client.errors explicitly
"""
