from typing import Any

from pydantic import BaseModel


class AggregateResult(BaseModel):
    """One upstream's answer in a fan-out round."""

    address: str
    document: Any
