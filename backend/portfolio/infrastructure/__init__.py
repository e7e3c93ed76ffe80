"""Infrastructure Layer — database, repositories, mail transport and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver exceptions mapped to core errors at this boundary (DatabaseError,
      SlugConflictError, NotificationError)
"""
