"""chclient ServerVersion Domain Model - Parsed server version."""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional

_VERSION_PATTERN = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?")


@total_ordering
@dataclass(frozen=True)
class ServerVersion:
    """Immutable server version.

    "latest" (or blank text) means the newest version and sorts after every
    numbered version.
    """

    year: int = 0
    feature: int = 0
    maintenance: int = 0
    build: int = 0
    latest: bool = False

    @classmethod
    def of(cls, text: Optional[str]) -> "ServerVersion":
        """Parse version text such as "21.3.1.123" or "ClickHouse 22.8".

        Args:
            text: Version text, blank or "latest" for the newest version

        Returns:
            Parsed version
        """
        if text is None or not text.strip() or text.strip().lower() == "latest":
            return cls(latest=True)

        match = _VERSION_PATTERN.search(text)
        if match is None:
            return cls(latest=True)

        parts = [int(p) if p else 0 for p in match.groups()]
        return cls(*parts)

    def _key(self) -> tuple:
        return (1, 0, 0, 0, 0) if self.latest else (0, self.year, self.feature, self.maintenance, self.build)

    def __lt__(self, other: "ServerVersion") -> bool:
        if not isinstance(other, ServerVersion):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        if self.latest:
            return "latest"
        return f"{self.year}.{self.feature}.{self.maintenance}.{self.build}"
