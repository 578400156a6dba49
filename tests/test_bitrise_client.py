#!/usr/bin/env python3
"""
Tests for Bitrise client functionality
"""

import unittest
from unittest.mock import Mock, patch
import os
import sys

import requests

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from bitrise_client import BitriseAPIError, BitriseClient


def make_response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    return response


class TestBitriseClient(unittest.TestCase):
    """Test Bitrise client functionality"""

    def setUp(self):
        self.client = BitriseClient("test-token")
        self.get_patcher = patch.object(self.client.session, "get")
        self.mock_get = self.get_patcher.start()

    def tearDown(self):
        self.get_patcher.stop()

    def test_initialization(self):
        """Test BitriseClient initialization"""
        self.assertEqual(self.client.base_url, "https://api.bitrise.io/v0.1")
        self.assertEqual(self.client.timeout, 20)
        self.assertEqual(self.client.session.headers["Authorization"], "token test-token")

    def test_get_builds(self):
        """Test the build list request and decoding"""
        self.mock_get.return_value = make_response(payload={
            "data": [{"slug": "build-1", "status": 1, "triggered_workflow": "release"}],
            "paging": {"total_item_count": 7, "page_item_limit": 1, "next": "build-2"},
        })

        builds = self.client.get_builds("app-1", "main", "release")

        self.mock_get.assert_called_once_with(
            "https://api.bitrise.io/v0.1/apps/app-1/builds",
            params={
                "sort_by": "running_first",
                "branch": "main",
                "workflow": "release",
                "status": 1,
                "limit": 1,
            },
            timeout=20,
        )
        self.assertEqual(len(builds.data), 1)
        self.assertEqual(builds.data[0].slug, "build-1")
        self.assertEqual(builds.paging.total_item_count, 7)
        self.mock_get.return_value.close.assert_called_once()

    def test_get_log_for_build(self):
        """Test the build log request and chunk ordering"""
        self.mock_get.return_value = make_response(payload={
            "is_archived": True,
            "generated_log_chunks_num": 2,
            "log_chunks": [
                {"chunk": "first", "position": 0},
                {"chunk": "second", "position": 1},
            ],
        })

        log = self.client.get_log_for_build("app-1", "build-1")

        self.assertEqual(
            self.mock_get.call_args[0][0],
            "https://api.bitrise.io/v0.1/apps/app-1/builds/build-1/log",
        )
        self.assertEqual([c.chunk for c in log.log_chunks], ["first", "second"])
        self.assertTrue(log.is_archived)
        self.mock_get.return_value.close.assert_called_once()

    def test_get_builds_error_status(self):
        """Test that a non-2xx status names the status code, workflow and branch"""
        self.mock_get.return_value = make_response(status_code=404)

        with self.assertRaises(BitriseAPIError) as ctx:
            self.client.get_builds("app-1", "feature/x", "release")

        message = str(ctx.exception)
        self.assertIn("404", message)
        self.assertIn("release", message)
        self.assertIn("feature/x", message)
        self.assertEqual(ctx.exception.status_code, 404)
        self.mock_get.return_value.json.assert_not_called()
        self.mock_get.return_value.close.assert_called_once()

    def test_get_log_error_status(self):
        """Test that a non-2xx status names the status code, app and build"""
        self.mock_get.return_value = make_response(status_code=404)

        with self.assertRaises(BitriseAPIError) as ctx:
            self.client.get_log_for_build("app-1", "build-1")

        message = str(ctx.exception)
        self.assertIn("404", message)
        self.assertIn("app-1", message)
        self.assertIn("build-1", message)
        self.mock_get.return_value.close.assert_called_once()

    def test_redirect_status_is_an_error(self):
        """Test that 3xx responses are rejected like 4xx/5xx"""
        self.mock_get.return_value = make_response(status_code=302)

        with self.assertRaises(BitriseAPIError):
            self.client.get_builds("app-1", "main", "release")

    def test_transport_failure(self):
        """Test that transport errors are wrapped with context"""
        self.mock_get.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(BitriseAPIError) as ctx:
            self.client.get_builds("app-1", "main", "release")

        self.assertIn("connection refused", str(ctx.exception))
        self.assertIn("release", str(ctx.exception))
        self.assertIsNone(ctx.exception.status_code)

    def test_decode_failure_propagates(self):
        """Test that JSON decode errors are not wrapped and still close the response"""
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        self.mock_get.return_value = response

        with self.assertRaises(ValueError) as ctx:
            self.client.get_log_for_build("app-1", "build-1")

        self.assertNotIsInstance(ctx.exception, BitriseAPIError)
        response.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
