from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from launchpad.constants import REQUIRED_LANES
from launchpad.core import fastlane
from launchpad.core.fastlane import (
    Fastlane,
    find_fastfile,
    lane_environment,
    last_reported_version,
    lane_bodies,
    missing_lanes,
    parse_lanes,
    self_bumping_lanes,
)
from launchpad.models import AppleCredentials
from launchpad.templates import list_templates, render_fastfile, render_project_config_example

FASTFILE = """
default_platform(:ios)

platform :ios do
  desc "Push a new beta build"
  lane :beta do
    build_app(scheme: "App")
  end

  private_lane :helper do
  end

  # lane :beta_minor do
  lane :beta_patch do |options|
    build_app(scheme: "App")
  end
end
"""

# Lanes that manage the version themselves
SELF_BUMPING_FASTFILE = """
default_platform(:ios)

platform :ios do
  lane :beta do
    increment_build_number
    build_app(scheme: "App")
    upload_to_testflight
  end

  lane :beta_patch do
    increment_version_number(bump_type: "patch")
    increment_build_number(build_number: 1)
    build_app(scheme: "App")
    upload_to_testflight
  end

  lane :beta_minor do
    increment_version_number(bump_type: "minor")
    increment_build_number(build_number: 1)
    build_app(scheme: "App")
    upload_to_testflight
  end
end
"""

INDIRECT_BUMP_FASTFILE = """
platform :ios do
  private_lane :prepare do
    increment_build_number
  end

  private_lane :ship do
    prepare
    upload_to_testflight
  end

  lane :beta do
    # increment_build_number is done in CI
    build_app(scheme: "App")
  end

  lane :beta_patch do
    ship
  end

  lane :beta_minor do
    build_app(scheme: "App")
  end
end
"""


class LaneParsingTests(unittest.TestCase):
    def test_parse_lanes(self) -> None:
        self.assertEqual(parse_lanes(FASTFILE), {"beta", "beta_patch"})

    def test_missing_lanes_in_required_order(self) -> None:
        self.assertEqual(missing_lanes(FASTFILE, REQUIRED_LANES), ["beta_minor"])

    def test_generated_fastfile_declares_every_lane(self) -> None:
        content = render_fastfile("MyApp")
        self.assertEqual(missing_lanes(content, REQUIRED_LANES), [])
        self.assertIn('build_app(scheme: "MyApp")', content)
        self.assertNotIn("{{SCHEME}}", content)
        self.assertNotIn("increment_version_number", content)

    def test_lanes_that_bump_the_version(self) -> None:
        self.assertEqual(self_bumping_lanes(SELF_BUMPING_FASTFILE, REQUIRED_LANES), REQUIRED_LANES)

    def test_bump_through_called_lane(self) -> None:
        self.assertEqual(self_bumping_lanes(INDIRECT_BUMP_FASTFILE, REQUIRED_LANES), ["beta_patch"])

    def test_commented_bump_is_ignored(self) -> None:
        self.assertNotIn("increment_build_number", lane_bodies(INDIRECT_BUMP_FASTFILE)["beta"])

    def test_generated_fastfile_never_bumps(self) -> None:
        self.assertEqual(self_bumping_lanes(render_fastfile("App"), REQUIRED_LANES), [])


class FastfileDiscoveryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _touch(self, relative: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
        return path

    def test_none_when_absent(self) -> None:
        self.assertIsNone(find_fastfile(self.root, "ios"))

    def test_root_fastlane_directory(self) -> None:
        expected = self._touch("fastlane/Fastfile")
        self.assertEqual(find_fastfile(self.root, "ios"), expected)

    def test_ios_directory_wins(self) -> None:
        self._touch("fastlane/Fastfile")
        self._touch("Fastfile")
        expected = self._touch("ios/fastlane/Fastfile")
        self.assertEqual(find_fastfile(self.root, "ios"), expected)


class LaneEnvironmentTests(unittest.TestCase):
    def test_environment_names(self) -> None:
        env = lane_environment(AppleCredentials("KEY123", "issuer-uuid", "/keys/AuthKey_KEY123.p8"))
        self.assertEqual(env, {
            "APP_STORE_CONNECT_API_KEY_KEY_ID": "KEY123",
            "APP_STORE_CONNECT_API_KEY_ISSUER_ID": "issuer-uuid",
            "APP_STORE_CONNECT_API_KEY_KEY_FILEPATH": "/keys/AuthKey_KEY123.p8",
            "FASTLANE_XCODEBUILD_SETTINGS_TIMEOUT": "180",
        })


class ReportedVersionTests(unittest.TestCase):
    def test_last_version_wins(self) -> None:
        output = [
            "[12:00:01]: Driving the lane 'ios beta'",
            "[12:00:05]: Building version 1.0.5 (7)",
            "[12:03:10]: Successfully uploaded build 1.0.6 (8) to App Store Connect",
            "[12:03:11]: fastlane.tools finished successfully",
        ]
        self.assertEqual(last_reported_version(output), "1.0.6 (8)")

    def test_ignores_unrelated_numbers(self) -> None:
        self.assertIsNone(last_reported_version(["Using Ruby 3.2.2", "ok"]))


class FastlaneToolTests(unittest.TestCase):
    def test_version_none_when_not_installed(self) -> None:
        with mock.patch.object(Fastlane, "path", return_value=None):
            self.assertIsNone(Fastlane.version())

    def test_version_parsed_from_output(self) -> None:
        completed = mock.Mock(returncode=0, stdout="fastlane installation at path:\n/usr/bin/fastlane\n"
                                                  "-----------------------------\nfastlane 2.219.0\n")
        with mock.patch.object(Fastlane, "path", return_value="/usr/bin/fastlane"), \
                mock.patch.object(fastlane.subprocess, "run", return_value=completed):
            self.assertEqual(Fastlane.version(), "2.219.0")


class TemplateTests(unittest.TestCase):
    def test_templates_are_packaged(self) -> None:
        templates = list_templates()
        self.assertIn("Fastfile", templates["fastlane"])
        self.assertIn("launchpad.yaml.example", templates["project"])
        self.assertIn("ios_path:", render_project_config_example())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
