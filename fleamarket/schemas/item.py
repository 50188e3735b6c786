"""Item schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value a BIGINT column holds
MAX_PRICE = 2**63 - 1


class ItemCreate(BaseModel):
    """Create a new item."""

    name: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=0, le=MAX_PRICE)
    description: str = Field("", max_length=2000)


class ItemUpdate(BaseModel):
    """Update an item.

    Only fields present in the request body are applied. An explicit null
    clears ``description``; it is rejected for every other field.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    price: int | None = Field(None, ge=0, le=MAX_PRICE)
    description: str | None = Field(None, max_length=2000)
    sold_out: bool | None = Field(None, alias="soldOut")

    @field_validator("name", "price", "sold_out")
    @classmethod
    def reject_null(cls, value):
        # Only runs for values present in the body; omitted fields keep the default
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value

    def changes(self) -> dict:
        """Return the attributes to apply, keyed by model column name."""
        changes = self.model_dump(exclude_unset=True)
        if "description" in changes and changes["description"] is None:
            changes["description"] = ""
        return changes


class ItemResponse(BaseModel):
    """Item response."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    price: int
    description: str
    sold_out: bool = Field(..., serialization_alias="soldOut")
    user_id: int = Field(..., serialization_alias="userId")


class ItemEnvelope(BaseModel):
    """Single item wrapped in a data envelope."""

    data: ItemResponse


class ItemListEnvelope(BaseModel):
    """Item collection wrapped in a data envelope."""

    data: list[ItemResponse]
