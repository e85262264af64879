"""Well-known instants.

Use these as sane lower and upper bounds instead of implementation-defined
extremes.
"""

from __future__ import annotations

from datemath.civil import CivilDateTime
from datemath.models import Instant, to_instant

# 1970-01-01T00:00:00Z; a safe minimum unless negative epoch values are welcome
AT_EPOCH = Instant.of_epoch_millis(0)

# 0000-01-01T00:00:00Z
AT_0AD = to_instant(CivilDateTime(0, 1, 1))

# 2000-01-01T00:00:00Z
AT_Y2K = to_instant(CivilDateTime(2000, 1, 1))

# Last second representable in a signed 32-bit Unix time: 2038-01-19T03:14:07Z
AT_Y2K38 = Instant.of_epoch_second(2_147_483_647)

# 9999-12-31T00:00:00Z; leaves room for later zones without a five digit year
AT_Y10K = to_instant(CivilDateTime(9999, 12, 31))

__all__ = ["AT_EPOCH", "AT_0AD", "AT_Y2K", "AT_Y2K38", "AT_Y10K"]
