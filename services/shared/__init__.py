"""Shared utilities and API contracts for the flow tree service."""

from .api_models import (
    BuildStatsDTO,
    BuildTreeRequest,
    BuildTreeResponse,
    FlowNodeDTO,
    FlowTreeDTO,
)
from .config import (
    get_cache_size,
    get_log_level,
    get_max_request_bytes,
    get_max_rows,
    get_port,
)
from .converters import build_stats_to_dto, flow_tree_to_dto, rows_fingerprint
from .logging import get_logger, setup_logging

__all__ = [
    "BuildStatsDTO",
    "BuildTreeRequest",
    "BuildTreeResponse",
    "FlowNodeDTO",
    "FlowTreeDTO",
    "build_stats_to_dto",
    "flow_tree_to_dto",
    "rows_fingerprint",
    "setup_logging",
    "get_logger",
    "get_port",
    "get_max_rows",
    "get_max_request_bytes",
    "get_cache_size",
    "get_log_level",
]
