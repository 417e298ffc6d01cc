"""Read-only inventory snapshot plus a seeding route for rooms/containers."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from homebox.services import assistant_workflow


class LocationSeed(BaseModel):
    name: str = Field(..., min_length=1)
    type: Literal["room", "cabinet", "wardrobe", "shelf", "drawer", "box"] = "room"
    parentName: Optional[str] = None
    roomType: Optional[str] = None


class SeedRequest(BaseModel):
    locations: List[LocationSeed] = Field(default_factory=list)


router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("/snapshot")
def get_snapshot() -> Dict[str, Any]:
    return {"status": "ok", **assistant_workflow.snapshot_payload()}


@router.post("/locations")
def seed_locations(payload: SeedRequest) -> Dict[str, Any]:
    try:
        ids = assistant_workflow.seed_locations(
            seed.model_dump(exclude_none=True) for seed in payload.locations
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"status": "ok", "ids": ids}
