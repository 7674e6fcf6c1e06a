"""
Environment loading and the runtime config embedded into the frontend.

The env file is chosen by NODE_ENV (``.env.test`` under test, ``.env``
otherwise) and loaded with override semantics, so values from the file
win over anything already exported in the process environment.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_FILE = ".env"
TEST_ENV_FILE = ".env.test"

FRONT_DIR_NAME = "front"
INDEX_FILE_NAME = "index.html"

# Project root: the parent of this package's directory
PROJECT_ROOT = Path(__file__).resolve().parents[1]


class FrontConfigError(Exception):
    """Invalid front config input (bad env directory, etc.)."""
    pass


def select_env_file(node_env: Optional[str] = None) -> str:
    """Return the env file name for the given NODE_ENV value."""
    if node_env is None:
        node_env = os.environ.get("NODE_ENV")
    return TEST_ENV_FILE if node_env == "test" else ENV_FILE


def load_env_file(
    node_env: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> Optional[Path]:
    """
    Load the NODE_ENV-selected env file into ``os.environ``.

    Args:
        node_env: Overrides the NODE_ENV environment variable
        base_dir: Directory holding the env files (default: cwd)

    Returns:
        Path of the loaded file, or None if it does not exist

    Raises:
        FrontConfigError: If base_dir is given but is not a directory
    """
    directory = Path(base_dir) if base_dir is not None else Path.cwd()
    if not directory.is_dir():
        raise FrontConfigError(f"Env directory not found: {directory}")
    env_path = directory / select_env_file(node_env)
    if not env_path.is_file():
        return None
    load_dotenv(env_path, override=True)
    return env_path


def default_front_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get("FRONT_BUILD_DIR")
    if override:
        return Path(override)
    return PROJECT_ROOT / FRONT_DIR_NAME


def default_index_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Location of the built frontend's index.html."""
    return default_front_dir(environ) / INDEX_FILE_NAME


class RuntimeConfig(BaseModel):
    """Settings exposed to the frontend as ``window._env_``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    server_base_url: Optional[str] = Field(
        default=None, alias="REACT_APP_SERVER_BASE_URL"
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RuntimeConfig":
        env = os.environ if environ is None else environ
        return cls(server_base_url=env.get("SERVER_URL"))

    def to_env_dict(self) -> Dict[str, Any]:
        # Unset values are left out, the frontend treats a missing key as unset
        return self.model_dump(by_alias=True, exclude_none=True)
