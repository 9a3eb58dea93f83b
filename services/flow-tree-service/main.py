"""
Flow Tree Service.

FastAPI microservice that turns parsed transaction sheet rows into a
money-flow hierarchy for the rendering layer.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path to import shared utilities
# In Docker, this will be /app, in local dev it's the project root
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cachetools import LRUCache
from fastapi import FastAPI

from flow_tree.tree_builder import build_tree
from services.shared.api_models import BuildTreeRequest, BuildTreeResponse, FlowTreeDTO
from services.shared.config import (
    get_cache_size,
    get_log_level,
    get_max_request_bytes,
    get_max_rows,
    get_port,
)
from services.shared.converters import flow_tree_to_dto, rows_fingerprint
from services.shared.error_sanitization import (
    BUILD_FAILED_MESSAGE,
    log_error_with_context,
    sanitize_error_message,
)
from services.shared.logging import get_logger, setup_logging
from services.shared.request_limits import RequestSizeLimitMiddleware

SERVICE_NAME = "flow-tree-service"
SERVICE_VERSION = "1.0.0"

logger = setup_logging(SERVICE_NAME, log_level=get_log_level())
service_logger = get_logger(__name__)

MAX_ROWS = get_max_rows()

# Idempotency cache
# Key: (request_id, rows_fingerprint)
_result_cache: LRUCache[tuple[str, str], FlowTreeDTO] = LRUCache(maxsize=get_cache_size())

app = FastAPI(
    title="Flow Tree Service",
    description="Reconstructs money-flow hierarchies from transaction sheet rows",
    version=SERVICE_VERSION,
)
app.add_middleware(RequestSizeLimitMiddleware, max_request_size=get_max_request_bytes())


@app.get("/health")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Dictionary with status and service name
    """
    return {"status": "healthy", "service": SERVICE_NAME}


@app.get("/")
async def root() -> dict[str, str]:
    """Service information."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
    }


@app.post("/build-tree", response_model=BuildTreeResponse)
async def build(request: BuildTreeRequest) -> BuildTreeResponse:
    """
    Build the money-flow hierarchy for the submitted rows.

    Always returns HTTP 200 for a valid body; check the 'status' field for
    success/failure. An empty `rows` list yields the "No Data" tree.

    Example:
        POST /build-tree
        {
            "request_id": "550e8400-e29b-41d4-a716-446655440000",
            "rows": [{"AccountNo": "A", "Layer": 0}, {"AccountNo": "B", "Layer": 1, "Parent": "A"}]
        }
    """
    request_id = request.request_id
    log_extra = {"request_id": request_id}

    if len(request.rows) > MAX_ROWS:
        service_logger.warning(
            f"Rejected build: rows_count={len(request.rows)} exceeds limit {MAX_ROWS}",
            extra=log_extra,
        )
        return BuildTreeResponse(
            request_id=request_id,
            status="failure",
            error=f"Too many rows: limit is {MAX_ROWS}",
        )

    fingerprint = rows_fingerprint(request.rows)
    cache_key = (request_id, fingerprint)
    cached = _result_cache.get(cache_key)
    if cached is not None:
        service_logger.info(
            f"Cache hit: fingerprint={fingerprint[:8]}...",
            extra=log_extra,
        )
        return BuildTreeResponse(request_id=request_id, status="success", tree=cached)

    service_logger.info(
        f"Cache miss: fingerprint={fingerprint[:8]}..., rows_count={len(request.rows)}",
        extra=log_extra,
    )

    try:
        tree = build_tree(request.rows)
        tree_dto = flow_tree_to_dto(tree)
    except Exception as e:
        log_error_with_context(
            service_logger,
            BUILD_FAILED_MESSAGE,
            e,
            request_id=request_id,
            rows_count=len(request.rows),
        )
        return BuildTreeResponse(
            request_id=request_id,
            status="failure",
            error=sanitize_error_message(e, BUILD_FAILED_MESSAGE),
        )

    service_logger.info(
        f"Build completed: accounts={tree.total_accounts}, layers={tree.total_layers}, "
        f"roots={len(tree.children)}",
        extra=log_extra,
    )
    _result_cache[cache_key] = tree_dto
    return BuildTreeResponse(request_id=request_id, status="success", tree=tree_dto)


if __name__ == "__main__":
    import uvicorn

    port = get_port()
    logger.info(f"Starting Flow Tree Service on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
