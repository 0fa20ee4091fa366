from pydantic import BaseModel, Field
from typing import List

class RouteRequest(BaseModel):
    """Route endpoints as [longitude, latitude] pairs"""
    start: List[float] = Field(..., min_length=2, max_length=2)
    end: List[float] = Field(..., min_length=2, max_length=2)
