#!/usr/bin/env python3
"""
Bitrise API client utilities
"""

from typing import Any, Dict, Optional

import requests

from constants import (
    API_BASE_URL,
    BUILD_QUERY_LIMIT,
    BUILD_QUERY_SORT,
    BUILD_QUERY_STATUS,
    REQUEST_TIMEOUT,
)
from models import BuildList, BuildLog


class BitriseAPIError(Exception):
    """Raised when the Bitrise API cannot be reached or answers with a non-2xx status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BitriseClient:
    def __init__(self, api_token: str, base_url: str = API_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"token {self.api_token}",
            "Accept": "application/json",
        })

    def get_builds(self, app_slug: str, branch_name: str, workflow_name: str) -> BuildList:
        """Get the latest build of a workflow on a branch, running builds first"""
        params = {
            "sort_by": BUILD_QUERY_SORT,
            "branch": branch_name,
            "workflow": workflow_name,
            "status": BUILD_QUERY_STATUS,
            "limit": BUILD_QUERY_LIMIT,
        }
        context = f"[workflow: {workflow_name}, branch: {branch_name}]"

        payload = self._get_json(f"apps/{app_slug}/builds", context, params=params)
        return BuildList.from_dict(payload)

    def get_log_for_build(self, app_slug: str, build_slug: str) -> BuildLog:
        """Get the chunked log of a build"""
        context = f"[build_slug: {build_slug}, app_slug: {app_slug}]"

        payload = self._get_json(f"apps/{app_slug}/builds/{build_slug}/log", context)
        return BuildLog.from_dict(payload)

    def _get_json(self, endpoint: str, context: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{endpoint}"

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise BitriseAPIError(f"request to {endpoint} failed for {context}: {e}") from e

        try:
            if response.status_code < 200 or response.status_code >= 300:
                raise BitriseAPIError(
                    f"failed to get {endpoint} with status code ({response.status_code}) for {context}",
                    status_code=response.status_code,
                )
            # Decode errors propagate unchanged
            return response.json()
        finally:
            response.close()
