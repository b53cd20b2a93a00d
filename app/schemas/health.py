"""Health check response: service status plus an inventory of the in-memory store."""

from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel


class HealthResponse(CamelModel):
    """`degraded` when the store is unreachable or a table is missing."""

    status: Literal["ok", "degraded"]
    environment: str
    database: Literal["connected", "disconnected"]
    tables: dict[str, int] = Field(default_factory=dict, description="Row count per table")
    missing_tables: list[str] = Field(default_factory=list)
