"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``ProductSearchDTO``: input for catalog search.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductSearchDTO(BaseModel):
    """Immutable DTO for catalog search requests.

    ``q`` is split on whitespace into lower-cased name terms; explicit
    ``terms`` win over ``q``.  ``category`` and ``categories`` are merged.
    """

    model_config = ConfigDict(frozen=True)

    q: str = ""
    terms: List[str] = []
    category: Optional[str] = None
    categories: List[str] = []
    max_price_cents: Optional[int] = None

    @field_validator("max_price_cents")
    @classmethod
    def price_must_be_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("max_price_cents must be a positive integer.")
        return v

    def search_terms(self) -> List[str]:
        if self.terms:
            return [t.strip().lower() for t in self.terms if t.strip()]
        return self.q.strip().lower().split()

    def search_categories(self) -> List[str]:
        merged = list(self.categories)
        if self.category:
            merged.append(self.category)
        return [c for c in merged if c]

