"""
API contracts for the flow tree service.

Defines Pydantic models for the build request/response with strict validation.
Rows are passed through as plain column -> scalar mappings; column names are
not validated here because resolving them is the builder's job.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

RowValue = Union[str, int, float, bool, None]
BuildStatus = Literal["success", "failure"]
RootFallback = Literal["none", "layer_zero", "first_node"]

MAX_ROWS_PER_REQUEST = 100000


class BuildStatsDTO(BaseModel):
    """Counts gathered while building one tree."""

    rows_received: int = Field(..., ge=0)
    rows_skipped: int = Field(..., ge=0)
    nodes_created: int = Field(..., ge=0)
    relationships_found: int = Field(..., ge=0)
    raw_roots: int = Field(..., ge=0)
    roots_selected: int = Field(..., ge=0)
    root_fallback: RootFallback = "none"


class FlowNodeDTO(BaseModel):
    """
    One account node in the returned hierarchy.

    Nodes flagged `cycle` (repeated on their own ancestor path), `ref`
    (subtree already sent under another parent) or `truncated` (nesting
    limit reached) are sent without children.
    """

    name: str = Field(..., min_length=1, description="Account identifier")
    id: str = Field(..., min_length=1, description="Unique node id (account-rowIndex)")
    layer: int = Field(..., ge=0, description="Hop distance from the origin account")
    attributes: Dict[str, Any] = Field(default_factory=dict)
    children: List["FlowNodeDTO"] = Field(default_factory=list)
    cycle: bool = False
    ref: bool = False
    truncated: bool = False


class FlowTreeDTO(BaseModel):
    """Synthetic root of the hierarchy with summary attributes."""

    name: str
    attributes: Dict[str, int] = Field(default_factory=dict)
    children: List[FlowNodeDTO] = Field(default_factory=list)
    stats: BuildStatsDTO

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Transaction Flow",
                "attributes": {"totalAccounts": 2, "totalLayers": 2},
                "children": [
                    {
                        "name": "A",
                        "id": "A-0",
                        "layer": 0,
                        "attributes": {"AccountNo": "A", "Layer": 0},
                        "children": [
                            {
                                "name": "B",
                                "id": "B-1",
                                "layer": 1,
                                "attributes": {"AccountNo": "B", "Layer": 1, "Parent": "A"},
                                "children": [],
                            }
                        ],
                    }
                ],
                "stats": {
                    "rows_received": 2,
                    "rows_skipped": 0,
                    "nodes_created": 2,
                    "relationships_found": 1,
                    "raw_roots": 1,
                    "roots_selected": 1,
                    "root_fallback": "none",
                },
            }
        }
    }


class BuildTreeRequest(BaseModel):
    """Request body for POST /build-tree."""

    request_id: str = Field(..., description="UUID request identifier")
    rows: List[Dict[str, RowValue]] = Field(
        ...,
        max_length=MAX_ROWS_PER_REQUEST,
        description="Parsed sheet rows (max 100,000 rows to bound build time)",
    )

    @field_validator("request_id")
    @classmethod
    def validate_request_id(cls, v: str) -> str:
        """Validate request_id is a valid UUID."""
        try:
            UUID(v)
        except ValueError as e:
            raise ValueError(f"Invalid UUID format: {v}") from e
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "rows": [
                    {"AccountNo": "A", "Layer": 0},
                    {"AccountNo": "B", "Layer": 1, "Parent": "A"},
                ],
            }
        }
    }


class BuildTreeResponse(BaseModel):
    """Response body for POST /build-tree."""

    request_id: str
    status: BuildStatus
    tree: FlowTreeDTO | None = None
    error: str | None = None

    @model_validator(mode="after")
    def validate_consistency(self) -> "BuildTreeResponse":
        """Validate tree and error consistency with status."""
        if self.status == "success":
            if self.tree is None:
                raise ValueError("tree must be non-null when status is 'success'")
            if self.error is not None:
                raise ValueError("error must be null when status is 'success'")
        else:
            if self.tree is not None:
                raise ValueError("tree must be null when status is 'failure'")
            if self.error is None:
                raise ValueError("error must be non-null when status is 'failure'")
        return self


FlowNodeDTO.model_rebuild()
