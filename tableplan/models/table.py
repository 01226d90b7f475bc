"""Floor reference data: sectors and tables"""

from pydantic import BaseModel, Field, model_validator


class Capacity(BaseModel):
    """Seating envelope of a table"""
    min: int = Field(ge=1)
    max: int = Field(ge=1)

    @model_validator(mode="after")
    def check_bounds(self) -> "Capacity":
        if self.min > self.max:
            raise ValueError("capacity min must not exceed max")
        return self

    class Config:
        frozen = True


class Sector(BaseModel):
    """Named grouping of tables (e.g. Terrace)"""
    id: str
    name: str
    color: str = "#3b82f6"
    sort_order: int = 0

    class Config:
        frozen = True


class Table(BaseModel):
    """A bookable table"""
    id: str
    sector_id: str
    name: str
    capacity: Capacity
    sort_order: int = 0

    class Config:
        frozen = True
