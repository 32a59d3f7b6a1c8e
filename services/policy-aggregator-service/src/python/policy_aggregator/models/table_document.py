from typing import Any
from pydantic import BaseModel

class TableDocument(BaseModel):
    url: str
    data: Any
