"""ORM Models — SQLAlchemy declarative models for the five record collections.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relationships between collections are informal (emails, app_id), no FKs

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from etuition.models.user import User  # noqa: F401
from etuition.models.tuition import Tuition  # noqa: F401
from etuition.models.application import Application  # noqa: F401
from etuition.models.payment import Payment  # noqa: F401
from etuition.models.notification import Notification  # noqa: F401
