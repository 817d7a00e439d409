"""Pydantic models for prefix assignments and API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class PrefixAssignments(BaseModel):
    """A stored prefix -> model name map."""
    version: str = "1"
    prefixes: dict[str, str] = {}

    def model_names(self) -> list[str]:
        return list(self.prefixes.values())


# ---------------------------------------------------------------------------
# API request/response models
# ---------------------------------------------------------------------------

class EncodeRequest(BaseModel):
    uuid: str = Field(..., description="Hyphenated UUID, e.g. 01960ec0-c6cf-74d3-ae14-50c20e035fe6")
    prefix: str = Field("", description="3 lowercase letters, or empty for no prefix")


class IdentifierRequest(BaseModel):
    id: str = Field(..., description="puidv7 identifier")
    prefix: str = Field("", description="Expected prefix, or empty to accept any")


class IdentifierResponse(BaseModel):
    id: str


class DecodeResponse(BaseModel):
    uuid: str


class ValidateResponse(BaseModel):
    valid: bool
    detail: Optional[str] = None


class DeriveRequest(BaseModel):
    models: list[str] = Field(..., description="Lowercase a-z model names in assignment order")


class DeriveResponse(BaseModel):
    prefixes: dict[str, str]
