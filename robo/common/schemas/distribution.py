"""
Distribution Schemas

Wire models for HIT (shareable task link) creation.

Request:  {"mode": "individual|group|open", "description": str, "participants": [str]?}
Response: {"hits": [{"name": str, "url": str}]?, "url": str?}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator


MAX_DESCRIPTION_LENGTH = 500
MAX_PARTICIPANT_NAME_LENGTH = 50
MAX_PARTICIPANTS = 50


class DistributionMode(str, Enum):
    """How task links are generated and addressed"""
    INDIVIDUAL = "individual"
    GROUP = "group"
    OPEN = "open"


@dataclass(frozen=True)
class DistributionModeInfo:
    label: str
    description: str
    requires_participants: bool
    creates_multiple_hits: bool


DISTRIBUTION_MODES: Dict[DistributionMode, DistributionModeInfo] = {
    DistributionMode.INDIVIDUAL: DistributionModeInfo(
        label="Individual Links",
        description="Separate link per person, name baked in",
        requires_participants=True,
        creates_multiple_hits=True,
    ),
    DistributionMode.GROUP: DistributionModeInfo(
        label="Group Link",
        description="Single link, pick your name from dropdown",
        requires_participants=True,
        creates_multiple_hits=False,
    ),
    DistributionMode.OPEN: DistributionModeInfo(
        label="Open Link",
        description="Single link, type your name",
        requires_participants=False,
        creates_multiple_hits=False,
    ),
}


def requires_participants(mode: DistributionMode) -> bool:
    return DISTRIBUTION_MODES[mode].requires_participants


def parse_participants(raw: str) -> List[str]:
    """Split a comma-separated name list, trimming entries and dropping empties"""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


class HitCreationRequest(BaseModel):
    """Outbound HIT creation request"""
    mode: DistributionMode
    description: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    participants: Optional[List[str]] = Field(default=None, max_length=MAX_PARTICIPANTS)

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("participants")
    @classmethod
    def _check_participant_names(cls, value):
        if value is None:
            return value
        for name in value:
            if not name or len(name) > MAX_PARTICIPANT_NAME_LENGTH:
                raise ValueError(
                    f"participant names must be 1-{MAX_PARTICIPANT_NAME_LENGTH} characters"
                )
        return value

    @model_validator(mode="after")
    def _check_mode_participants(self):
        if requires_participants(self.mode):
            if not self.participants:
                raise ValueError(f"{self.mode.value} mode requires at least one participant")
        elif self.participants is not None:
            raise ValueError("open mode does not take a participant list")
        return self

    def to_payload(self) -> dict:
        """JSON body for the creation endpoint (participants omitted when absent)"""
        return self.model_dump(mode="json", exclude_none=True)


class HitLink(BaseModel):
    """One generated link and who it is for"""
    name: str
    url: str


class HitCreationResult(BaseModel):
    """
    Inbound HIT creation response.

    Both fields may be present at once; ``hits`` wins when it has entries.
    """
    hits: Optional[List[HitLink]] = None
    url: Optional[str] = None

    @property
    def links(self) -> List[Tuple[str, str]]:
        return [(hit.name, hit.url) for hit in self.hits or []]

    @property
    def resolved_link(self) -> Optional[str]:
        if self.hits:
            return self.hits[0].url
        if self.url:
            return self.url
        return None
