"""Region Access Gate

Read-time visibility policy for distribution rounds and everything reached
through them (attendance, attendance aggregates, distribution summaries,
project beneficiary links).

Policy:
- A round is visible iff round.location == caller_region
- caller_region is per-request context, never a property of the data
- No region (None or blank) => nothing is visible
"""

from typing import Iterable, List, Optional
from sqlalchemy import false
from sqlalchemy.sql.elements import ColumnElement
from src.domain.distribution_round import DistributionRound


class RegionGate:

    @staticmethod
    def normalize(caller_region: Optional[str]) -> Optional[str]:
        if caller_region is None:
            return None
        region = caller_region.strip()
        return region or None

    def is_visible(self, location: str, caller_region: Optional[str]) -> bool:
        region = self.normalize(caller_region)
        return region is not None and location == region

    def visible_rounds(
        self, all_rounds: Iterable[DistributionRound], caller_region: Optional[str]
    ) -> List[DistributionRound]:
        """Post-fetch filter: keep only rounds in the caller's region"""
        return [r for r in all_rounds if self.is_visible(r.location, caller_region)]

    def round_predicate(self, location_column, caller_region: Optional[str]) -> ColumnElement:
        """
        Same policy as a SQL predicate

        Args:
            location_column: Column holding a round location (rounds table or
                a table denormalizing it)
            caller_region: Region from the request context

        Returns:
            WHERE clause element; always false when no region is set
        """
        region = self.normalize(caller_region)
        if region is None:
            return false()
        return location_column == region
