from typing import Any
from pydantic import BaseModel, Field

class AggregatedTable(BaseModel):
    url: str = Field(serialization_alias="URL")
    data: Any = Field(serialization_alias="Data")
