"""
Shared API response models and helpers.
"""

from typing import Optional

from fastapi import Response, status
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")


def created_response(body: BaseModel, location: str) -> Response:
    """201 with a Location header pointing at the new resource"""
    return Response(
        content=body.model_dump_json(),
        status_code=status.HTTP_201_CREATED,
        media_type="application/json",
        headers={"Location": location},
    )


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)
