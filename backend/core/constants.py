"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any validation or business rule that references a numeric constant should
import it from here instead of hardcoding.  This avoids drift between the
serializers, the workflow rules and the tests.
"""

# ── Workflow responses ──────────────────────────────────────────────
# Minimum trimmed length of an officer's response when a report leaves
# ``pending`` or is closed (resolved / rejected).
REPORT_RESPONSE_MIN_LENGTH: int = 10

# A suggestion response only has to be non-empty.
SUGGESTION_RESPONSE_MIN_LENGTH: int = 1

# ── Submission rules ────────────────────────────────────────────────
SUGGESTION_DESCRIPTION_MIN_LENGTH: int = 10

LATITUDE_RANGE: tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: tuple[float, float] = (-180.0, 180.0)

# ── Accounts ────────────────────────────────────────────────────────
PHONE_NUMBER_PATTERN: str = r"^[0-9]{10,14}$"
PASSWORD_MIN_LENGTH: int = 6
