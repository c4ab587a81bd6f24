"""Run configuration for pr-context."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_BASE_BRANCH = "main"
DEFAULT_OUTPUT_DIR = ".pr_context"
DEFAULT_REMOTE = "origin"
DEFAULT_HOST = "github.com"
DEFAULT_API_URL = "https://api.github.com"

TOKEN_ENV = "GITHUB_TOKEN"
OUTPUT_DIR_ENVS = ("PR_CONTEXT_OUTPUT_DIR", "OUTPUT_DIR")
BASE_BRANCH_ENV = "BASE_BRANCH"
API_URL_ENV = "GITHUB_API_URL"


class RunConfig(BaseModel):
    """Everything a single report run needs, resolved up front."""

    base_branch: str = DEFAULT_BASE_BRANCH
    output_path: str | None = None
    output_dir: str = DEFAULT_OUTPUT_DIR
    remote: str = DEFAULT_REMOTE
    host: str = DEFAULT_HOST
    api_url: str = DEFAULT_API_URL
    token: str | None = Field(default=None, repr=False)
    git_timeout: float = 120.0
    api_timeout: float = 30.0
    required_tools: list[str] = Field(default_factory=lambda: ["git"])

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def tracking_ref(self, branch: str) -> str:
        """Remote-tracking ref name for a branch, e.g. ``origin/main``."""
        return f"{self.remote}/{branch}"


def load_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> RunConfig:
    """Build a RunConfig from the environment plus explicit overrides.

    Overrides set to None are ignored so CLI options that were not given
    fall through to the environment and then to the defaults.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    token = env.get(TOKEN_ENV, "").strip()
    if token:
        data["token"] = token

    for name in OUTPUT_DIR_ENVS:
        if env.get(name):
            data["output_dir"] = env[name]
            break

    if env.get(BASE_BRANCH_ENV):
        data["base_branch"] = env[BASE_BRANCH_ENV]

    if env.get(API_URL_ENV):
        data["api_url"] = env[API_URL_ENV].rstrip("/")

    data.update({key: value for key, value in overrides.items() if value is not None})
    return RunConfig(**data)
