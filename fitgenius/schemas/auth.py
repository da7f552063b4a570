"""Auth and small request payload schemas."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Login or registration payload."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str


class WeightUpdate(BaseModel):
    """Body for POST /weight."""
    weight: float = Field(..., gt=0, description="Body weight in kg")
