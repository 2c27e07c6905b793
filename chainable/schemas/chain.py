"""Chain result schemas."""

from datetime import date

from pydantic import BaseModel, Field, computed_field


class ChainSummary(BaseModel):
    """Current and longest chains for one owner's association."""

    owner_id: str
    association: str
    column: str
    today: date
    current: int
    current_except_today: int
    longest: int
    chains: list[list[date]] = Field(default_factory=list)

    @computed_field
    @property
    def total_days(self) -> int:
        """Distinct days with at least one record."""
        return sum(len(chain) for chain in self.chains)
