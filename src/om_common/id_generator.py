"""Match ids: m_<utc second>_<process-wide sequence>, e.g. m_20260301120000_000042.

Unique within one running service, which is all the in-memory journals need.
"""

import itertools
from collections.abc import Callable
from datetime import datetime

from src.om_common.datetime_utils import utc_now


class MatchIdGenerator:
    def __init__(self, prefix: str = "m", clock: Callable[[], datetime] = utc_now) -> None:
        self._prefix = prefix
        self._clock = clock
        self._sequence = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}_{self._clock():%Y%m%d%H%M%S}_{next(self._sequence):06d}"


_default_generator = MatchIdGenerator()


def generate_match_id() -> str:
    return _default_generator.next_id()
