"""
Cheese Catalog Backend — Pydantic Request/Response Schemas
===========================================================

What:  Pydantic models defining the API contract with the frontend.
How:   CheeseRequest parses the JSON `cheese` part of a multipart request;
       CheeseResponse is what list/get endpoints serialize.
Who:   Used by the request handlers and by CheeseService as its return type.

Key naming:
    The frontend speaks camelCase (imageName, imageType, imageData), so the
    response model serializes by alias while Python code uses snake_case.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cheese_api.models.cheese import CheeseColor


# ══════════════════════════════════════════════════════════════════════════
# Request models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class CheeseRequest(BaseModel):
    """
    What:  The `cheese` JSON part of POST/PUT /cheeses.

    Fields are intentionally loose: presence and range checks belong to the
    request handlers, which report them with fixed messages in a fixed order.
        - name: may be missing or empty here
        - price: a missing price reads as 0 and fails the "> 0" check;
          NaN and Infinity are rejected outright
        - color: kept as the raw string; CheeseColor.parse() decides membership

    Any other key (id, imageData, ...) is ignored.
    """
    name: Optional[str] = None
    price: float = Field(default=0.0, allow_inf_nan=False)
    color: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def parsed_color(self) -> Optional[CheeseColor]:
        return CheeseColor.parse(self.color)


# ══════════════════════════════════════════════════════════════════════════
# Response models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class CheeseResponse(BaseModel):
    """
    What:  Full representation of a cheese, returned by GET /cheeses and
           GET /cheeses/{id}.

    image_data is the derived data URI (`data:<type>;base64,<bytes>`), ready
    to drop into an <img src>. The raw blob is never part of the response.
    """
    id: int = Field(description="Cheese identifier")
    name: str = Field(description="Cheese name")
    price: float = Field(description="Unit price, always > 0")
    color: CheeseColor = Field(description="One of WHITE, CREAM, YELLOW, ORANGE, BROWN")
    image_name: Optional[str] = Field(default=None, description="Original image filename")
    image_type: Optional[str] = Field(default=None, description="Image MIME type")
    image_data: Optional[str] = Field(
        default=None,
        description="Image as a base64 data URI, null if the record has no image",
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class HealthResponse(BaseModel):
    """Fixed health payload: {"healthy": true}."""
    healthy: bool = Field(default=True, description="Always true when the service answers")
