from __future__ import annotations

from datetime import date, timedelta
import unittest

from fitcheck.poses.catalog import COMMON_POSES, Gender, Pose, poses_for_gender
from fitcheck.tracking.compliance import evaluate, latest_photo_by_pose
from tests.helpers import full_check, photo, weight


class WeightComplianceTests(unittest.TestCase):
    def test_single_log_scenario(self) -> None:
        history = [weight("2024-01-01", 70.0)]

        state = evaluate(history, [], COMMON_POSES, today=date(2024, 1, 10))
        self.assertTrue(state.weight_overdue)
        self.assertEqual(state.next_weight_check_due, date(2024, 1, 10))

        state = evaluate(history, [], COMMON_POSES, today=date(2024, 1, 8))
        self.assertFalse(state.weight_overdue)
        self.assertEqual(state.next_weight_check_due, date(2024, 1, 8))

        state = evaluate(history, [], COMMON_POSES, today=date(2024, 1, 20))
        self.assertTrue(state.weight_overdue)
        self.assertEqual(state.next_weight_check_due, date(2024, 1, 20))

    def test_empty_history_is_overdue(self) -> None:
        state = evaluate([], [], COMMON_POSES, today=date(2024, 1, 1))
        self.assertTrue(state.weight_overdue)
        self.assertEqual(state.next_weight_check_due, date(2024, 1, 1))

    def test_seven_day_boundary(self) -> None:
        history = [weight("2024-01-01")]
        self.assertFalse(evaluate(history, [], COMMON_POSES, today=date(2024, 1, 8)).weight_overdue)
        self.assertTrue(evaluate(history, [], COMMON_POSES, today=date(2024, 1, 9)).weight_overdue)

    def test_latest_log_is_used_regardless_of_order(self) -> None:
        history = [weight("2024-01-15"), weight("2024-01-01")]
        state = evaluate(history, [], COMMON_POSES, today=date(2024, 1, 20))
        self.assertFalse(state.weight_overdue)


class PhotoComplianceTests(unittest.TestCase):
    def test_no_photos_marks_every_pose_missing(self) -> None:
        state = evaluate([], [], COMMON_POSES, today=date(2024, 1, 1))
        self.assertTrue(state.photos_overdue)
        self.assertEqual(set(state.per_pose_status), set(COMMON_POSES))
        for status in state.per_pose_status.values():
            self.assertFalse(status.present)
            self.assertFalse(status.recent)
            self.assertIsNone(status.days_since)
        self.assertEqual(state.missing_poses, list(COMMON_POSES))

    def test_twenty_eight_day_freshness_boundary(self) -> None:
        today = date(2024, 3, 1)
        at_limit = full_check(COMMON_POSES, (today - timedelta(days=28)).isoformat())
        state = evaluate([], at_limit, COMMON_POSES, today=today)
        self.assertFalse(state.photos_overdue)

        past_limit = full_check(COMMON_POSES, (today - timedelta(days=29)).isoformat())
        state = evaluate([], past_limit, COMMON_POSES, today=today)
        self.assertTrue(state.photos_overdue)
        self.assertEqual(state.stale_poses, list(COMMON_POSES))

    def test_single_stale_pose_makes_check_overdue(self) -> None:
        today = date(2024, 3, 1)
        photos = full_check(COMMON_POSES[1:], "2024-02-20") + [photo(COMMON_POSES[0], "2024-01-01")]
        state = evaluate([], photos, COMMON_POSES, today=today)
        self.assertTrue(state.photos_overdue)
        self.assertEqual(state.stale_poses, [COMMON_POSES[0]])
        self.assertEqual(state.per_pose_status[COMMON_POSES[0]].days_since, 60)
        self.assertTrue(state.per_pose_status[COMMON_POSES[1]].recent)

    def test_latest_photo_per_pose_is_used(self) -> None:
        today = date(2024, 3, 1)
        photos = full_check(COMMON_POSES, "2024-02-25") + full_check(COMMON_POSES, "2023-12-01")
        state = evaluate([], photos, COMMON_POSES, today=today)
        self.assertFalse(state.photos_overdue)
        latest = latest_photo_by_pose(photos, COMMON_POSES)
        self.assertEqual(latest[Pose.BACK_ARMS_DOWN].check_date, date(2024, 2, 25))

    def test_missing_gender_pose_makes_check_overdue(self) -> None:
        today = date(2024, 3, 1)
        female = poses_for_gender(Gender.FEMALE)
        state = evaluate([], full_check(COMMON_POSES, "2024-02-28"), female, today=today)
        self.assertTrue(state.photos_overdue)
        self.assertEqual(state.missing_poses, [Pose.BACK_ARMS_EXTENDED])

    def test_photos_of_other_poses_are_ignored(self) -> None:
        today = date(2024, 3, 1)
        photos = full_check(COMMON_POSES, "2024-02-28") + [photo(Pose.FRONT_BICEPS, "2024-02-28")]
        state = evaluate([], photos, COMMON_POSES, today=today)
        self.assertNotIn(Pose.FRONT_BICEPS, state.per_pose_status)
        self.assertFalse(state.photos_overdue)


if __name__ == "__main__":
    unittest.main()
