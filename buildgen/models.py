from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    prompt: str = Field("", description="Natural-language description of the building; required")
    max_dim: Optional[int] = Field(default=None, description="Square horizontal limit (older clients)")
    width: Optional[int] = Field(default=None, description="Target size along x")
    depth: Optional[int] = Field(default=None, description="Target size along z")
    height: Optional[int] = Field(default=None, description="Target number of layers (y)")


class StructureModel(BaseModel):
    """Response shape of /generate, for the OpenAPI docs."""

    name: Optional[str] = None
    size: List[int] = Field(..., min_length=3, max_length=3, description="[x, y, z]")
    palette: Dict[str, str] = Field(..., description="Palette key -> block identifier")
    layers: Dict[str, List[List[str]]] = Field(..., description="Layer index ('0' = ground) -> rows of palette keys")


class ErrorModel(BaseModel):
    error: str


class ValidateRequest(BaseModel):
    structure: Dict[str, Any]
    max_dim: Optional[int] = None
    width: Optional[int] = None
    depth: Optional[int] = None
    height: Optional[int] = None
