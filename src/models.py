#!/usr/bin/env python3
"""
Data models for Bitrise API responses
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def _as_object(payload: Any, name: str) -> Dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object for {name}, got {type(payload).__name__}")
    return payload


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp as returned by the API"""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class EnvironmentBinding:
    """One environment variable passed to the build when it was triggered"""
    mapped_to: str
    value: str
    is_expand: bool = False

    @classmethod
    def from_dict(cls, payload: Any) -> "EnvironmentBinding":
        data = _as_object(payload, "environment binding")
        return cls(
            mapped_to=data.get("mapped_to") or "",
            value=data.get("value") or "",
            is_expand=bool(data.get("is_expand", False)),
        )


@dataclass
class OriginalBuildParams:
    """Parameters the build was originally triggered with"""
    branch: str = ""
    tag: str = ""
    commit_hash: str = ""
    commit_message: str = ""
    workflow_id: str = ""
    branch_dest: str = ""
    pull_request_id: str = ""
    pull_request_repository_url: str = ""
    pull_request_merge_branch: str = ""
    pull_request_head_branch: str = ""
    environments: List[EnvironmentBinding] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "OriginalBuildParams":
        data = _as_object(payload, "original build params")
        return cls(
            branch=data.get("branch") or "",
            tag=data.get("tag") or "",
            commit_hash=data.get("commit_hash") or "",
            commit_message=data.get("commit_message") or "",
            workflow_id=data.get("workflow_id") or "",
            branch_dest=data.get("branch_dest") or "",
            pull_request_id=str(data.get("pull_request_id") or ""),
            pull_request_repository_url=data.get("pull_request_repository_url") or "",
            pull_request_merge_branch=data.get("pull_request_merge_branch") or "",
            pull_request_head_branch=data.get("pull_request_head_branch") or "",
            environments=[EnvironmentBinding.from_dict(env) for env in data.get("environments") or []],
        )


@dataclass
class Build:
    """A single Bitrise build"""
    slug: str
    status: int = 0
    status_text: str = ""
    triggered_at: Optional[datetime] = None
    started_on_worker_at: Optional[datetime] = None
    environment_prepare_finished_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    abort_reason: Optional[str] = None
    is_on_hold: bool = False
    branch: str = ""
    build_number: int = 0
    commit_hash: str = ""
    commit_message: str = ""
    tag: str = ""
    triggered_workflow: str = ""
    triggered_by: Optional[str] = None
    stack_config_type: str = ""
    stack_identifier: str = ""
    original_build_params: OriginalBuildParams = field(default_factory=OriginalBuildParams)
    # Pull request metadata is absent for non-PR builds
    pull_request_id: Optional[str] = None
    pull_request_target_branch: Optional[str] = None
    pull_request_view_url: Optional[str] = None
    commit_view_url: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "Build":
        data = _as_object(payload, "build")
        return cls(
            slug=data.get("slug") or "",
            status=int(data.get("status") or 0),
            status_text=data.get("status_text") or "",
            triggered_at=_parse_timestamp(data.get("triggered_at")),
            started_on_worker_at=_parse_timestamp(data.get("started_on_worker_at")),
            environment_prepare_finished_at=_parse_timestamp(data.get("environment_prepare_finished_at")),
            finished_at=_parse_timestamp(data.get("finished_at")),
            abort_reason=_optional_str(data.get("abort_reason")),
            is_on_hold=bool(data.get("is_on_hold", False)),
            branch=data.get("branch") or "",
            build_number=int(data.get("build_number") or 0),
            commit_hash=data.get("commit_hash") or "",
            commit_message=data.get("commit_message") or "",
            tag=data.get("tag") or "",
            triggered_workflow=data.get("triggered_workflow") or "",
            triggered_by=_optional_str(data.get("triggered_by")),
            stack_config_type=data.get("stack_config_type") or "",
            stack_identifier=data.get("stack_identifier") or "",
            original_build_params=OriginalBuildParams.from_dict(data.get("original_build_params")),
            pull_request_id=_optional_str(data.get("pull_request_id")),
            pull_request_target_branch=_optional_str(data.get("pull_request_target_branch")),
            pull_request_view_url=_optional_str(data.get("pull_request_view_url")),
            commit_view_url=_optional_str(data.get("commit_view_url")),
        )


@dataclass
class Paging:
    total_item_count: int = 0
    page_item_limit: int = 0
    next: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "Paging":
        data = _as_object(payload, "paging")
        return cls(
            total_item_count=int(data.get("total_item_count") or 0),
            page_item_limit=int(data.get("page_item_limit") or 0),
            next=data.get("next") or "",
        )


@dataclass
class BuildList:
    """First page of the build list endpoint"""
    data: List[Build] = field(default_factory=list)
    paging: Paging = field(default_factory=Paging)

    @classmethod
    def from_dict(cls, payload: Any) -> "BuildList":
        data = _as_object(payload, "build list")
        return cls(
            data=[Build.from_dict(build) for build in data.get("data") or []],
            paging=Paging.from_dict(data.get("paging")),
        )


@dataclass
class LogChunk:
    chunk: str
    position: int = 0

    @classmethod
    def from_dict(cls, payload: Any) -> "LogChunk":
        data = _as_object(payload, "log chunk")
        return cls(
            chunk=data.get("chunk") or "",
            position=int(data.get("position") or 0),
        )


@dataclass
class BuildLog:
    """Log of a build, split into ordered chunks"""
    log_chunks: List[LogChunk] = field(default_factory=list)
    is_archived: bool = False
    expiring_raw_log_url: str = ""
    generated_log_chunks_num: int = 0
    timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "BuildLog":
        data = _as_object(payload, "build log")
        return cls(
            log_chunks=[LogChunk.from_dict(chunk) for chunk in data.get("log_chunks") or []],
            is_archived=bool(data.get("is_archived", False)),
            expiring_raw_log_url=data.get("expiring_raw_log_url") or "",
            generated_log_chunks_num=int(data.get("generated_log_chunks_num") or 0),
            timestamp=_optional_str(data.get("timestamp")),
        )
