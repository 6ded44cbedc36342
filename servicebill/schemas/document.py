from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FILLER_VALUES = {"", "n/a", "not available"}


class DocumentType(str, Enum):
    INVOICE = "invoice"
    QUOTATION = "quotation"
    RECEIPT = "receipt"
    SERVICE = "service"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LineItem(_CamelModel):
    description: str = ""
    unit_price: float = 0
    quantity: float = 0
    total: float = 0

    @field_validator("description", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("unit_price", "quantity", "total", mode="before")
    @classmethod
    def _number_or_zero(cls, v: Any) -> float:
        # Models sometimes answer "500/-" or null; anything unparseable counts as 0.
        try:
            return float(v)
        except (TypeError, ValueError):
            return 0.0


class ServiceDetails(_CamelModel):
    vehicle_number: str = Field("", description="The vehicle number.")
    customer_name: str = Field("", description="The customer name.")
    car_model: str = Field("", description="The car model.")
    items: list[LineItem] = Field(default_factory=list, description="The list of items with their details.")

    @field_validator("vehicle_number", "customer_name", "car_model", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v: Any) -> list:
        if not isinstance(v, list):
            return []
        return [i for i in v if isinstance(i, dict)]

    def has_meaningful_data(self) -> bool:
        def is_filler(value: str) -> bool:
            return value.strip().lower() in FILLER_VALUES

        has_customer_data = not all(
            is_filler(v) for v in (self.customer_name, self.vehicle_number, self.car_model)
        )
        return has_customer_data or bool(self.items)
