"""Pydantic models for scheduled slots and the record envelope."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from events_api.store import schema

FieldsT = TypeVar("FieldsT")


class AirtableRecord(BaseModel, Generic[FieldsT]):
    """One record as the store returns it: id, field-bag, creation time."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    fields: FieldsT
    created_time: str = Field(default="", alias="createdTime")


class RecordList(BaseModel, Generic[FieldsT]):
    """The ``{records: [...]}`` envelope."""

    records: list[AirtableRecord[FieldsT]] = Field(default_factory=list)


class ScheduledSlotFields(BaseModel):
    """Field-bag of a scheduled slot.

    The store omits empty fields, so every key has a default. Keys this
    service does not know about are kept as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    first_name: str = Field(default="", alias=schema.SLOT_FIRST_NAME)
    last_name: str = Field(default="", alias=schema.SLOT_LAST_NAME)
    slot_time: Any = Field(default=None, alias=schema.SLOT_TIME)
    type: list[str] = Field(default_factory=list, alias=schema.SLOT_TYPE)
    confirmed: bool = Field(default=False, alias=schema.SLOT_CONFIRMED)
    volunteer_status: str = Field(default="", alias=schema.SLOT_VOLUNTEER_STATUS)
    email: str = Field(default="", alias=schema.SLOT_EMAIL)
    volunteer_group: str | None = Field(default=None, alias=schema.SLOT_VOLUNTEER_GROUP)
    cant_come: bool = Field(default=False, alias=schema.SLOT_CANT_COME)


ScheduledSlot = AirtableRecord[ScheduledSlotFields]
ScheduledSlotList = RecordList[ScheduledSlotFields]


class SlotUpdate(BaseModel):
    """Attendance flags a user may change on a scheduled slot."""

    model_config = ConfigDict(populate_by_name=True)

    confirmed: bool | None = Field(default=None, alias=schema.SLOT_CONFIRMED)
    cant_come: bool | None = Field(default=None, alias=schema.SLOT_CANT_COME)

    @model_validator(mode="after")
    def check_not_empty(self) -> "SlotUpdate":
        if self.confirmed is None and self.cant_come is None:
            raise ValueError("at least one of 'Confirmed?' or \"Can't Come\" must be set")
        return self

    def to_fields(self) -> dict[str, bool]:
        """Field-bag patch keyed by the store's field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
