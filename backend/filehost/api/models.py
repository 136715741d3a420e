from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "healthy"
    uptime: float = Field(..., ge=0, description="Process uptime in seconds")
    timestamp: str
    pythonVersion: str


class FilesResponse(BaseModel):
    files: List[str] = Field(default_factory=list)
    pythonVersion: str
    port: int
    hasTunnel: bool
    publicUrl: Optional[str] = None


class NotFoundResponse(BaseModel):
    error: str = "File not found"
    path: str
    availableEndpoints: List[str]


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
    path: Optional[str] = None
