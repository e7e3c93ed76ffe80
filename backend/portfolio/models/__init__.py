"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - BlogPost owns its PostTag rows; Contact stands alone

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from portfolio.models.blog_post import BlogPost, PostTag  # noqa: F401
from portfolio.models.contact import Contact  # noqa: F401
