from __future__ import annotations

import unittest

from launchpad.api.exceptions import ConfigInvalidError
from launchpad.constants import ErrorCode
from launchpad.models import (
    AppleCredentials,
    BumpKind,
    CheckResult,
    DeployFailure,
    DeployOptions,
    DeployStage,
    DeploySuccess,
    GlobalConfig,
    PreflightReport,
    ProcessResult,
    ProjectConfig,
    Version,
)


class DeployOptionsTests(unittest.TestCase):
    def test_no_flags_is_build_only(self) -> None:
        self.assertEqual(DeployOptions.from_flags().bump, BumpKind.NONE)

    def test_patch_flag(self) -> None:
        self.assertEqual(DeployOptions.from_flags(patch=True).bump, BumpKind.PATCH)

    def test_minor_wins_over_patch(self) -> None:
        with self.assertLogs("DeployOptions", level="WARNING"):
            options = DeployOptions.from_flags(patch=True, minor=True)
        self.assertEqual(options.bump, BumpKind.MINOR)

    def test_flags_are_carried(self) -> None:
        options = DeployOptions.from_flags(skip_git_check=True, no_tag=True)
        self.assertTrue(options.skip_git_check)
        self.assertTrue(options.no_tag)


class ProjectConfigTests(unittest.TestCase):
    def test_deploy_section_defaults(self) -> None:
        config = ProjectConfig.from_dict({"project": {"ios_path": "ios", "scheme": "App"}})
        self.assertEqual(config.ios_path, "ios")
        self.assertEqual(config.scheme, "App")
        self.assertEqual(config.bundle_id, "")
        self.assertTrue(config.git_tag)
        self.assertTrue(config.push_tags)
        self.assertTrue(config.clean_artifacts)
        self.assertEqual(config.remote, "origin")

    def test_explicit_values(self) -> None:
        config = ProjectConfig.from_dict({
            "project": {"ios_path": ".", "scheme": "Demo", "bundle_id": "com.example.demo"},
            "deploy": {"git_tag": False, "push_tags": False, "clean_artifacts": False, "remote": "upstream"},
        })
        self.assertFalse(config.git_tag)
        self.assertFalse(config.push_tags)
        self.assertFalse(config.clean_artifacts)
        self.assertEqual(config.remote, "upstream")
        self.assertEqual(ProjectConfig.from_dict(config.to_dict()), config)

    def test_missing_scheme_is_invalid(self) -> None:
        with self.assertRaises(ConfigInvalidError) as ctx:
            ProjectConfig.from_dict({"project": {"ios_path": "ios"}})
        self.assertIn("project.scheme", str(ctx.exception))
        self.assertEqual(ctx.exception.error_code, ErrorCode.CONFIG_INVALID)

    def test_non_mapping_is_invalid(self) -> None:
        with self.assertRaises(ConfigInvalidError):
            ProjectConfig.from_dict(["ios"])


class GlobalConfigTests(unittest.TestCase):
    def test_from_dict(self) -> None:
        config = GlobalConfig.from_dict({
            "apple": {"key_id": "ABC123", "issuer_id": "issuer", "key_path": "~/keys/AuthKey.p8"}
        })
        self.assertEqual(config.apple.key_id, "ABC123")
        self.assertFalse(config.apple.expanded_key_path.startswith("~"))

    def test_missing_apple_section(self) -> None:
        with self.assertRaises(ConfigInvalidError):
            GlobalConfig.from_dict({})

    def test_missing_credential_field(self) -> None:
        with self.assertRaises(ConfigInvalidError) as ctx:
            AppleCredentials.from_dict({"key_id": "ABC123", "key_path": "/k.p8"})
        self.assertIn("issuer_id", str(ctx.exception))


class ResultModelTests(unittest.TestCase):
    def test_report_passes_only_when_all_checks_pass(self) -> None:
        report = PreflightReport([CheckResult("Xcode", True, "Xcode 15.0")])
        self.assertTrue(report.passed)

        report.checks.append(CheckResult("fastlane", False, "fastlane not found",
                                         hint="run: brew install fastlane"))
        self.assertFalse(report.passed)
        self.assertEqual(report.names(), ["Xcode", "fastlane"])
        self.assertEqual(report.summary(), "fastlane: fastlane not found (run: brew install fastlane)")

    def test_process_result_tail(self) -> None:
        result = ProcessResult(1, [f"line {i}" for i in range(20)])
        self.assertFalse(result.success)
        self.assertEqual(result.tail(2), "line 18\nline 19")

    def test_outcome_dicts(self) -> None:
        success = DeploySuccess(Version(1, 0, 1, 2), tag_created=True, tag_name="v1.0.1")
        self.assertTrue(success.success)
        self.assertEqual(success.to_dict()["version"], {"major": 1, "minor": 0, "patch": 1, "build": 2})

        failure = DeployFailure(DeployStage.INVOKE, "fastlane exited with status 1",
                                error_code=ErrorCode.PROCESS_FAILED)
        self.assertFalse(failure.success)
        self.assertEqual(failure.to_dict()["stage"], "invoke")
        self.assertEqual(failure.to_dict()["error_code"], "LP010")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
