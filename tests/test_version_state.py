from __future__ import annotations

import unittest

from launchpad.api.exceptions import InvalidVersionError
from launchpad.constants import VERSION_COMPONENT_MAX
from launchpad.core.version_state import VersionState, compute_next
from launchpad.models import BumpKind, Version


class ComputeNextTests(unittest.TestCase):
    def test_patch_bumps_patch_and_build(self) -> None:
        self.assertEqual(
            compute_next(Version(1, 0, 0, 1), BumpKind.PATCH),
            Version(1, 0, 1, 2),
        )

    def test_minor_resets_patch(self) -> None:
        self.assertEqual(
            compute_next(Version(1, 0, 5, 7), BumpKind.MINOR),
            Version(1, 1, 0, 8),
        )

    def test_none_only_bumps_build(self) -> None:
        self.assertEqual(
            compute_next(Version(2, 3, 4, 9), BumpKind.NONE),
            Version(2, 3, 4, 10),
        )

    def test_major_is_never_changed(self) -> None:
        for bump in BumpKind:
            self.assertEqual(compute_next(Version(4, 2, 1, 3), bump).major, 4)

    def test_build_strictly_increases(self) -> None:
        version = Version(0, 9, 9, 41)
        for bump in BumpKind:
            self.assertGreater(compute_next(version, bump).build, version.build)

    def test_pure_function(self) -> None:
        current = Version(1, 2, 3, 4)
        first = compute_next(current, BumpKind.MINOR)
        second = compute_next(current, BumpKind.MINOR)
        self.assertEqual(first, second)
        self.assertEqual(current, Version(1, 2, 3, 4))

    def test_build_overflow_is_rejected(self) -> None:
        with self.assertRaises(InvalidVersionError):
            compute_next(Version(1, 0, 0, VERSION_COMPONENT_MAX), BumpKind.NONE)

    def test_patch_overflow_is_rejected(self) -> None:
        with self.assertRaises(InvalidVersionError):
            compute_next(Version(1, 0, VERSION_COMPONENT_MAX, 1), BumpKind.PATCH)

    def test_minor_overflow_is_rejected(self) -> None:
        with self.assertRaises(InvalidVersionError):
            compute_next(Version(1, VERSION_COMPONENT_MAX, 0, 1), BumpKind.MINOR)


class VersionStateTests(unittest.TestCase):
    def test_lane_follows_bump(self) -> None:
        current = Version(1, 0, 0, 1)
        self.assertEqual(VersionState(current).lane, "beta")
        self.assertEqual(VersionState(current, BumpKind.PATCH).lane, "beta_patch")
        self.assertEqual(VersionState(current, BumpKind.MINOR).lane, "beta_minor")

    def test_next_is_computed_once(self) -> None:
        state = VersionState(Version(1, 0, 5, 7), BumpKind.MINOR)
        self.assertEqual(state.current, Version(1, 0, 5, 7))
        self.assertEqual(state.next, Version(1, 1, 0, 8))
        self.assertIn("1.0.5 (7) -> 1.1.0 (8)", repr(state))


class VersionModelTests(unittest.TestCase):
    def test_tag_name_uses_marketing_version(self) -> None:
        version = Version(1, 2, 3, 45)
        self.assertEqual(version.marketing, "1.2.3")
        self.assertEqual(version.tag_name, "v1.2.3")
        self.assertEqual(str(version), "1.2.3 (45)")

    def test_rejects_negative_components(self) -> None:
        with self.assertRaises(InvalidVersionError):
            Version(1, -1, 0, 1)

    def test_rejects_zero_build(self) -> None:
        with self.assertRaises(InvalidVersionError):
            Version(1, 0, 0, 0)

    def test_rejects_non_integers(self) -> None:
        with self.assertRaises(InvalidVersionError):
            Version(1, 0, "2", 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
