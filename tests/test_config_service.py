from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from launchpad.api.deployer import Deployer
from launchpad.api.exceptions import ConfigInvalidError
from launchpad.constants import ErrorCode
from launchpad.core.path_resolver import PathResolver, find_project_root
from launchpad.models import AppleCredentials, GlobalConfig, ProjectConfig
from launchpad.services.config_service import ConfigService

CREDENTIAL_ENV = ("APPLE_API_KEY_ID", "APPLE_API_ISSUER_ID", "APPLE_API_KEY_PATH")


class ConfigServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name)
        self.root = base / "project"
        self.root.mkdir()
        self.config_dir = base / "home" / ".launchpad"

        env = {k: v for k, v in os.environ.items() if k not in CREDENTIAL_ENV}
        env["LAUNCHPAD_CONFIG_DIR"] = str(self.config_dir)
        patcher = mock.patch.dict(os.environ, env, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.service = ConfigService(PathResolver(self.root))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_project_config_absent(self) -> None:
        self.assertIsNone(self.service.load_project_config())

    def test_project_config_round_trip(self) -> None:
        config = ProjectConfig(ios_path="ios", scheme="App", bundle_id="com.example.app", push_tags=False)
        path = self.service.save_project_config(config)

        self.assertEqual(path, self.root / ".launchpad.yaml")
        self.assertEqual(self.service.load_project_config(), config)

    def test_project_config_yaml_layout(self) -> None:
        (self.root / ".launchpad.yaml").write_text(
            "project:\n"
            "  ios_path: ios\n"
            "  scheme: App\n"
            "deploy:\n"
            "  git_tag: false\n",
            encoding="utf-8",
        )
        config = self.service.load_project_config()
        self.assertFalse(config.git_tag)
        self.assertTrue(config.push_tags)
        self.assertTrue(config.clean_artifacts)

    def test_project_config_expands_environment(self) -> None:
        os.environ["APP_SCHEME"] = "Staging"
        (self.root / ".launchpad.yaml").write_text(
            "project:\n  ios_path: ios\n  scheme: ${APP_SCHEME}\n", encoding="utf-8")
        self.assertEqual(self.service.load_project_config().scheme, "Staging")

    def test_invalid_yaml(self) -> None:
        (self.root / ".launchpad.yaml").write_text("project: [ios\n", encoding="utf-8")
        with self.assertRaises(ConfigInvalidError):
            self.service.load_project_config()

    def test_section_that_is_not_a_mapping(self) -> None:
        for content in ("project: ios\n",
                        "project:\n  ios_path: ios\n  scheme: App\ndeploy: [x]\n"):
            (self.root / ".launchpad.yaml").write_text(content, encoding="utf-8")
            with self.assertRaises(ConfigInvalidError) as cm:
                self.service.load_project_config()
            self.assertEqual(cm.exception.error_code, ErrorCode.CONFIG_INVALID)
            self.assertIn("must be a mapping", str(cm.exception))
            self.assertIn("launchpad init", cm.exception.hint)

    def test_quoted_boolean_is_rejected(self) -> None:
        (self.root / ".launchpad.yaml").write_text(
            'project:\n  ios_path: ios\n  scheme: App\ndeploy:\n  git_tag: "false"\n',
            encoding="utf-8",
        )
        with self.assertRaises(ConfigInvalidError) as cm:
            self.service.load_project_config()
        self.assertIn("deploy.git_tag", str(cm.exception))

    def test_malformed_config_becomes_failed_check(self) -> None:
        (self.root / ".launchpad.yaml").write_text("project: ios\n", encoding="utf-8")

        deployer = Deployer(self.root)

        self.assertIsNone(deployer.config)
        [error] = [e for e in deployer.load_errors if e.name == "Project"]
        self.assertFalse(error.passed)
        self.assertEqual(error.error_code, ErrorCode.CONFIG_INVALID)

    def test_utf8_config_is_read_regardless_of_locale(self) -> None:
        (self.root / ".launchpad.yaml").write_text(
            "project:\n  ios_path: ios\n  scheme: Café\n", encoding="utf-8")
        self.assertEqual(self.service.load_project_config().scheme, "Café")

    def test_credentials_that_are_not_a_mapping(self) -> None:
        with self.assertRaises(ConfigInvalidError):
            AppleCredentials.from_dict(["KEY", "ISSUER"])
        self.config_dir.mkdir(parents=True)
        (self.config_dir / "config.yaml").write_text("apple: KEY\n", encoding="utf-8")
        with self.assertRaises(ConfigInvalidError):
            self.service.load_global_config()

    def test_saving_keeps_backup(self) -> None:
        self.service.save_project_config(ProjectConfig(ios_path="ios", scheme="App"))
        self.service.save_project_config(ProjectConfig(ios_path="ios", scheme="Other"))
        self.assertTrue((self.root / ".launchpad.yaml.bak").exists())

    def test_global_config_absent(self) -> None:
        self.assertIsNone(self.service.load_global_config())

    def test_global_config_round_trip(self) -> None:
        config = GlobalConfig(AppleCredentials("KEY123", "issuer-uuid", "~/.launchpad/keys/AuthKey_KEY123.p8"))
        path = self.service.save_global_config(config)

        self.assertEqual(path, self.config_dir / "config.yaml")
        self.assertEqual(self.service.load_global_config(), config)
        if os.name != "nt":
            self.assertEqual(stat.S_IMODE(path.stat().st_mode), 0o600)

    def test_environment_overrides_file(self) -> None:
        self.service.save_global_config(GlobalConfig(AppleCredentials("FILE", "file-issuer", "/file.p8")))
        os.environ.update({
            "APPLE_API_KEY_ID": "ENV",
            "APPLE_API_ISSUER_ID": "env-issuer",
            "APPLE_API_KEY_PATH": "/env.p8",
        })

        config = self.service.load_global_config()
        self.assertEqual(config.apple, AppleCredentials("ENV", "env-issuer", "/env.p8"))

    def test_partial_environment_is_ignored(self) -> None:
        os.environ["APPLE_API_KEY_ID"] = "ENV"
        self.assertIsNone(self.service.load_global_config())


class ProjectRootTests(unittest.TestCase):
    def test_walks_up_to_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".launchpad.yaml").write_text("project: {}\n", encoding="utf-8")
            nested = root / "ios" / "App"
            nested.mkdir(parents=True)

            self.assertEqual(find_project_root(nested), root)
            self.assertEqual(PathResolver(root).resolve("ios"), root / "ios")

    def test_no_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(find_project_root(tmp))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
