"""View models for shipments and kits as shown on the company card.

Source field names (hs_object_id, order_num, tracking_num, ...) are accepted
as aliases; the models expose snake_case names. An omitted field and an
explicit null both end up as None.
"""

from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

Year = Union[int, str]


def _blank_tag_to_none(value: Any) -> Any:
    """An empty string or a tag without a value counts as absent."""
    if value == "" or (isinstance(value, dict) and not value.get("value")):
        return None
    return value


class TaggedValue(BaseModel):
    """Enumeration property: machine value plus display label."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        # Plain strings come back for properties without option labels
        if isinstance(data, str):
            return {"value": data, "label": data}
        if isinstance(data, dict) and data.get("label") is None and "value" in data:
            return {**data, "label": data["value"]}
        return data


class KitRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    year: Optional[Year] = None
    kit_number: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("kit_number", "kitNumber"),
    )
    status: Optional[TaggedValue] = None
    hold_reason: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("hold_reason", "holdReason"),
    )

    @field_validator("kit_number", mode="before")
    @classmethod
    def _number_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status_is_absent(cls, value: Any) -> Any:
        return _blank_tag_to_none(value)


class ShipmentRecord(BaseModel):
    """One shipment associated with a company, with its kits in server order."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("hs_object_id", "id"))
    year: Optional[Year] = None
    order_number: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("order_num", "orderNumber", "order_number"),
    )
    description: Optional[str] = None
    status: Optional[TaggedValue] = None
    carrier: Optional[TaggedValue] = None
    tracking_number: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tracking_num", "trackingNumber", "tracking_number"),
    )
    kits: List[KitRecord] = Field(default_factory=list)

    @field_validator("id", "order_number", "tracking_number", mode="before")
    @classmethod
    def _identifier_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("kits", mode="before")
    @classmethod
    def _kits_never_none(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("status", "carrier", mode="before")
    @classmethod
    def _blank_tag_is_absent(cls, value: Any) -> Any:
        return _blank_tag_to_none(value)

    @field_validator("tracking_number", mode="after")
    @classmethod
    def _blank_tracking_is_absent(cls, value: Optional[str]) -> Optional[str]:
        return value or None
