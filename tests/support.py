from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

GIT_AVAILABLE = shutil.which("git") is not None

PBXPROJ = """// !$*UTF8*$!
{
	archiveVersion = 1;
	objects = {

/* Begin XCBuildConfiguration section */
		13B07F941A680F5B00A75B9A /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				CURRENT_PROJECT_VERSION = {build};
				INFOPLIST_FILE = App/Info.plist;
				MARKETING_VERSION = {marketing};
				PRODUCT_BUNDLE_IDENTIFIER = com.example.app;
				PRODUCT_NAME = "$(TARGET_NAME)";
			};
			name = Debug;
		};
		13B07F951A680F5B00A75B9A /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				CURRENT_PROJECT_VERSION = {build};
				INFOPLIST_FILE = App/Info.plist;
				MARKETING_VERSION = {marketing};
				PRODUCT_BUNDLE_IDENTIFIER = com.example.app;
				PRODUCT_NAME = "$(TARGET_NAME)";
			};
			name = Release;
		};
		00E356F61AD99517003FC87E /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				CURRENT_PROJECT_VERSION = 1;
				MARKETING_VERSION = 1.0;
				PRODUCT_BUNDLE_IDENTIFIER = com.example.app.tests;
			};
			name = Debug;
		};
		83CBBA201A601CBA00E9B192 /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				ALWAYS_SEARCH_USER_PATHS = NO;
				SDKROOT = iphoneos;
			};
			name = Debug;
		};
/* End XCBuildConfiguration section */
	};
	rootObject = 83CBB9F71A601CBA00E9B192 /* Project object */;
}
"""


def write_xcode_project(ios_dir: Path, marketing: str = "1.0.5", build: str = "7",
                        name: str = "App") -> Path:
    """Create ``<ios_dir>/<name>.xcodeproj/project.pbxproj`` and return its path"""
    project = ios_dir / f"{name}.xcodeproj"
    project.mkdir(parents=True, exist_ok=True)
    pbxproj = project / "project.pbxproj"
    pbxproj.write_text(
        PBXPROJ.replace("{marketing}", marketing).replace("{build}", build),
        encoding="utf-8",
    )
    return pbxproj


def git(path: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def init_repo(path: Path) -> Path:
    """Initialize a repository with a local identity and no signing"""
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "config", "user.email", "dev@example.com")
    git(path, "config", "user.name", "Dev")
    git(path, "config", "commit.gpgsign", "false")
    git(path, "config", "tag.gpgsign", "false")
    return path


def commit_all(path: Path, message: str = "initial") -> str:
    git(path, "add", "-A")
    git(path, "commit", "-q", "-m", message)
    return git(path, "rev-parse", "HEAD")


def add_bare_remote(path: Path, remote_dir: Path, name: str = "origin") -> Path:
    subprocess.run(
        ["git", "init", "-q", "--bare", str(remote_dir)],
        capture_output=True,
        check=True,
    )
    git(path, "remote", "add", name, str(remote_dir))
    return remote_dir
