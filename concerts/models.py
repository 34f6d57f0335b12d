"""
Pydantic models for the concerts API
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RawConcertRecord(BaseModel):
    """
    A concert item as stored in the concerts table.

    Attribute names follow the table (ID, Description, ...); the camelCase
    field names are accepted too. Missing strings and prices fall back to
    empty/zero so that they fail the completeness check rather than decoding.
    The ticket counts and start time stay None when absent.
    """
    model_config = ConfigDict(strict=True, populate_by_name=True, extra='ignore')

    id: str = Field(default="", alias="ID")
    description: str = Field(default="", alias="Description")
    imageURL: str = Field(default="", alias="ImageURL")
    dateTime: Optional[int] = Field(default=None, alias="DateTime")
    totalTickets: Optional[int] = Field(default=None, alias="TotalTickets", ge=0)
    ticketsSold: Optional[int] = Field(default=None, alias="TicketsSold", ge=0)
    fullPrice: float = Field(default=0.0, alias="FullPrice")
    concessionPrice: float = Field(default=0.0, alias="ConcessionPrice")


class ClientConcert(BaseModel):
    """A concert as returned to clients"""
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    imageURL: str
    date: str
    time: str
    availableTickets: int = Field(ge=0)
    fullPrice: float
    concessionPrice: float

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump()
