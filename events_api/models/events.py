"""Pydantic response models for the events API.

Keys are camelCase on the wire because the front-end reads them directly.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """A future pickup/packing event with its participant breakdown."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date_display: str = Field(alias="dateDisplay")
    date: datetime
    time: str
    main_location: str = Field(alias="mainLocation")
    num_drivers: int = Field(alias="numDrivers")
    num_packers: int = Field(alias="numPackers")
    num_total_participants: int = Field(alias="numtotalParticipants")
    num_only_drivers: int = Field(alias="numOnlyDrivers")
    num_only_packers: int = Field(alias="numOnlyPackers")
    num_both_drivers_and_packers: int = Field(alias="numBothDriversAndPackers")
    num_special_groups: int = Field(alias="numSpecialGroups")
    scheduled_slots: list[str] = Field(default_factory=list, alias="scheduledSlots")
