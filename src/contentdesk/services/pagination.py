"""Page/limit helpers shared by the listing services."""

import math
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Page:
    """One page of a listing."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def describe(self, total: int) -> dict[str, Any]:
        """Pagination block returned alongside listed items."""
        return {**asdict(self), "total": total, "pages": math.ceil(total / self.limit)}
