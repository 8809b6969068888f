from datetime import UTC, datetime

ADMIN_ROLES = frozenset({"Co-Owner", "Snow"})
FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
