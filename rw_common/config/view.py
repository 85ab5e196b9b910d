"""Column preferences forwarded verbatim to renderers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ViewSetting(BaseModel):
    """Custom columns and default sort for one resource view.

    The table engine never interprets these values; it only tells the
    accessor to keep full object payloads and hands the setting to the
    renderer.
    """

    columns: list[str] = Field(default_factory=list)
    sort_column: str = ""

    model_config = ConfigDict(extra="ignore")

    def is_blank(self) -> bool:
        return not self.columns and not self.sort_column
