"""
Runtime config injection into the built frontend.

The frontend's index.html carries a region delimited by two marker
comments.  This module owns that region: it rewrites it with a fresh
``<script>`` block assigning the runtime config to ``window._env_`` and
leaves every other byte of the document alone.

Injection is best-effort.  A missing or read-only build is reported as a
SKIPPED result and logged; it never raises.
"""

import json
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from bs4 import BeautifulSoup
from pydantic import BaseModel

from front_config.env import RuntimeConfig, default_index_path

logger = logging.getLogger(__name__)

BEGIN_MARKER = "<!-- BEGIN: Twenty Config -->"
END_MARKER = "<!-- END: Twenty Config -->"
SCRIPT_ID = "twenty-env-config"
DEFAULT_METADATA_MARKER = "Maninfini Automation"

FALLBACK_MESSAGE = (
    "Frontend build not found or not writable, "
    "assuming it is served independently"
)

CONFIG_REGION_RE = re.compile(
    re.escape(BEGIN_MARKER) + r".*?" + re.escape(END_MARKER),
    re.DOTALL,
)
ENV_ASSIGNMENT_RE = re.compile(r"window\._env_\s*=\s*(\{.*\})\s*;?", re.DOTALL)


class InjectionStatus(str, Enum):
    INJECTED = "injected"
    SKIPPED = "skipped"


class InjectionResult(BaseModel):
    status: InjectionStatus
    index_path: str
    region_found: bool = False
    changed: bool = False
    metadata_present: bool = False
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.status == InjectionStatus.SKIPPED


def serialize_config(config: RuntimeConfig) -> str:
    """Serialize the config to indented JSON that is safe inside <script>."""
    text = json.dumps(config.to_env_dict(), indent=2, ensure_ascii=False)
    return text.replace("</", "<\\/")


def build_config_block(config: RuntimeConfig) -> str:
    """Build the full marker-delimited block for the given config."""
    return (
        f"{BEGIN_MARKER}\n"
        f'    <script id="{SCRIPT_ID}">\n'
        f"      window._env_ = {serialize_config(config)};\n"
        f"    </script>\n"
        f"    {END_MARKER}"
    )


def replace_config_region(content: str, block: str) -> Tuple[str, bool]:
    """
    Replace the first marker-delimited region in ``content`` with ``block``.

    Returns:
        (new content, whether a region was found).  Content without a
        complete marker pair is returned unchanged.
    """
    # A callable replacement keeps backslashes in the block literal
    new_content, count = CONFIG_REGION_RE.subn(lambda _match: block, content, count=1)
    return new_content, count > 0


def generate_front_config(
    config: RuntimeConfig,
    index_path: Optional[Path] = None,
    metadata_marker: Optional[str] = DEFAULT_METADATA_MARKER,
) -> InjectionResult:
    """
    Synchronize the config block in the frontend's index.html.

    Args:
        config: Runtime config to embed
        index_path: Target document (default: the bundled front build)
        metadata_marker: Text expected to survive in the document; its
            absence only triggers a warning.  None disables the check.

    Returns:
        INJECTED once the file has been written back, SKIPPED when the
        build could not be read or written
    """
    path = Path(index_path) if index_path is not None else default_index_path()
    block = build_config_block(config)

    try:
        # Bytes round-trip keeps the document's line endings untouched
        original = path.read_bytes().decode("utf-8")
        content, region_found = replace_config_region(original, block)

        metadata_present = metadata_marker is None or metadata_marker in content
        if not metadata_present:
            logger.warning(
                f"{metadata_marker} metadata not found in {path}, "
                "custom metadata may have been overwritten by the build"
            )

        path.write_bytes(content.encode("utf-8"))
    except (OSError, UnicodeError) as e:
        logger.info(FALLBACK_MESSAGE)
        logger.debug(f"Config injection skipped for {path}: {e}")
        return InjectionResult(
            status=InjectionStatus.SKIPPED,
            index_path=str(path),
            error=str(e),
        )

    if not region_found:
        logger.debug(f"No config region in {path}, document left unchanged")

    return InjectionResult(
        status=InjectionStatus.INJECTED,
        index_path=str(path),
        region_found=region_found,
        changed=content != original,
        metadata_present=metadata_present,
    )


def read_embedded_config(content: str) -> Optional[Dict[str, Any]]:
    """
    Extract the ``window._env_`` mapping from an HTML document.

    Returns None when the config script is missing or its assignment
    cannot be parsed.
    """
    soup = BeautifulSoup(content, "html.parser")
    script = soup.find("script", id=SCRIPT_ID)
    if script is None:
        return None

    match = ENV_ASSIGNMENT_RE.search(script.get_text())
    if not match:
        return None

    try:
        value = json.loads(match.group(1))
    except json.JSONDecodeError:
        return None

    return value if isinstance(value, dict) else None
