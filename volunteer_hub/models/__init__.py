# SQLModel definitions, imported here to ensure metadata is populated for Alembic.
from .base import CredentialMixin, TimestampMixin, UUIDMixin  # noqa: F401
from .volunteer import Volunteer  # noqa: F401
from .company import Company  # noqa: F401
from .engagement import Engagement  # noqa: F401
