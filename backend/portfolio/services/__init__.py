"""Services Layer — blog and contact orchestration.

Invariants:
    - Services receive repositories and the mail notifier by injection
    - No per-request state survives a call
"""
