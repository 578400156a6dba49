#!/usr/bin/env python3
"""
Constants for the Bitrise artifact exporter step
"""

# Bitrise REST API
API_DOMAIN = "https://api.bitrise.io"
API_VERSION = "v0.1"
API_BASE_URL = f"{API_DOMAIN}/{API_VERSION}"

# Seconds before an API request is abandoned
REQUEST_TIMEOUT = 20

# Query used to find the latest matching build (running builds first)
BUILD_QUERY_SORT = "running_first"
BUILD_QUERY_STATUS = 1
BUILD_QUERY_LIMIT = 1

# Environment variables read at startup
ENV_API_AUTH_TOKEN = "API_AUTH_TOKEN"
ENV_APP_SLUG = "APP_SLUG"
ENV_WORKFLOW_NAME = "WORKFLOW_NAME"
ENV_BRANCH_NAME = "BITRISE_GIT_BRANCH"
ENV_ARTIFACT_NAME = "ARTIFACT_NAME"

# Executable that owns `envman add`
ENVMAN_EXECUTABLE = "bitrise"

# Version-like value following the artifact name, e.g. "1.2" or "1.2.3"
ARTIFACT_VALUE_PATTERN = r"(\d+(?:\.\d+)+)"
