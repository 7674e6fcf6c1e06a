"""
Pydantic models for API request/response schemas.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


# ── Front config ──────────────────────────────────────────────────────────

class FrontConfigResponse(BaseModel):
    env: Dict[str, Any]  # as exposed on window._env_
    env_file: Optional[str] = None


class EmbeddedConfigResponse(BaseModel):
    index_path: str
    env: Dict[str, Any]
