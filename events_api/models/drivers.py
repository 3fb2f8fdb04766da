"""Pydantic response models for the drivers API."""

from pydantic import BaseModel, ConfigDict, Field


class ProcessedDriver(BaseModel):
    """A delivery driver with the details needed to assign routes."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    time_slot: str = Field(alias="timeSlot")
    delivery_count: int = Field(alias="deliveryCount")
    zip_code: str = Field(alias="zipCode")
    vehicle: str
    restricted_locations: list[str] = Field(default_factory=list, alias="restrictedLocations")
