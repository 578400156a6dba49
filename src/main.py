#!/usr/bin/env python3
"""
Bitrise Artifact Exporter - republish a version found in another build's log
"""

import sys
from typing import Optional

from bitrise_client import BitriseClient
from config import Config
from envman_client import EnvmanClient
from log_extractor import extract_artifact_value
from models import BuildList


class NoBuildFoundError(Exception):
    """Raised when the build list for the workflow is empty"""


class ArtifactExporter:
    """Main class for the exporter step"""

    def __init__(self, config: Config, bitrise: Optional[BitriseClient] = None,
                 envman: Optional[EnvmanClient] = None):
        self.config = config
        self.bitrise = bitrise or BitriseClient(config.api_auth_token)
        self.envman = envman or EnvmanClient()

    def run(self) -> Optional[str]:
        """Main execution method; returns the published value, if any"""
        config = self.config
        print(f"🔍 Looking up latest '{config.workflow_name}' build on branch '{config.branch_name}'...")

        builds = self.bitrise.get_builds(config.app_slug, config.branch_name, config.workflow_name)
        build_slug = self._select_build_slug(builds)
        print(f"🏗️  Using build {build_slug}")

        log = self.bitrise.get_log_for_build(config.app_slug, build_slug)
        print(f"📄 Scanning {len(log.log_chunks)} log chunk(s) for '{config.artifact_name}'...")

        value = extract_artifact_value(config.artifact_name, log.log_chunks)
        if value is None:
            print(f"⚠️  No '{config.artifact_name} <version>' line found in the log of build {build_slug} - nothing exported")
            return None

        self.envman.add(config.artifact_name, value)
        print("✅ Exported environment variable:")
        print(f"- {config.artifact_name}: {value}")
        return value

    def _select_build_slug(self, builds: BuildList) -> str:
        """Pick the first (and only requested) build"""
        if not builds.data:
            raise NoBuildFoundError(
                f"no build found for [app_slug: {self.config.app_slug}, "
                f"workflow: {self.config.workflow_name}, branch: {self.config.branch_name}]"
            )
        return builds.data[0].slug


def main():
    """Entry point for the exporter step"""
    try:
        config = Config.from_env()
        exporter = ArtifactExporter(config)
        exporter.run()
    except Exception as e:
        print(f"❌ Artifact export failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
