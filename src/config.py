#!/usr/bin/env python3
"""
Step configuration read from the environment
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from constants import (
    ENV_API_AUTH_TOKEN,
    ENV_APP_SLUG,
    ENV_ARTIFACT_NAME,
    ENV_BRANCH_NAME,
    ENV_WORKFLOW_NAME,
)


class ConfigError(ValueError):
    """Raised when a required environment variable is missing"""


def _require(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key, "")
    if not value:
        raise ConfigError(f"environment variable ({key}) is not set")
    return value


@dataclass(frozen=True)
class Config:
    """Immutable snapshot of the step inputs"""
    api_auth_token: str
    app_slug: str
    workflow_name: str
    artifact_name: str
    branch_name: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build the configuration, failing on the first missing required key"""
        if environ is None:
            environ = os.environ

        api_auth_token = _require(environ, ENV_API_AUTH_TOKEN)
        app_slug = _require(environ, ENV_APP_SLUG)
        workflow_name = _require(environ, ENV_WORKFLOW_NAME)
        branch_name = environ.get(ENV_BRANCH_NAME, "")
        artifact_name = _require(environ, ENV_ARTIFACT_NAME)

        return cls(
            api_auth_token=api_auth_token,
            app_slug=app_slug,
            workflow_name=workflow_name,
            artifact_name=artifact_name,
            branch_name=branch_name,
        )
