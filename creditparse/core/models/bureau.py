from __future__ import annotations

import re
from enum import Enum
from typing import Optional


class Bureau(str, Enum):
    TransUnion = "TransUnion"
    Experian = "Experian"
    Equifax = "Equifax"
    Unknown = "Unknown"

    @classmethod
    def coerce(cls, value: Optional[str | "Bureau"]) -> "Bureau":
        """Map a free-form bureau hint onto a :class:`Bureau` member.

        Matching is case-insensitive and tolerant of spacing, so ``"TU"``,
        ``"trans union"`` and ``"TransUnion"`` all resolve to
        ``Bureau.TransUnion``. Anything unrecognised becomes ``Unknown``.
        """

        if isinstance(value, Bureau):
            return value
        if not value:
            return cls.Unknown
        key = re.sub(r"[\s_\-]+", "", str(value)).lower()
        return _ALIASES.get(key, cls.Unknown)


_ALIASES = {
    "tu": Bureau.TransUnion,
    "tuc": Bureau.TransUnion,
    "transunion": Bureau.TransUnion,
    "ex": Bureau.Experian,
    "exp": Bureau.Experian,
    "xpn": Bureau.Experian,
    "experian": Bureau.Experian,
    "eq": Bureau.Equifax,
    "efx": Bureau.Equifax,
    "equifax": Bureau.Equifax,
    "unknown": Bureau.Unknown,
}


__all__ = ["Bureau"]
