from __future__ import annotations

from datetime import date
import unittest

from fitcheck.poses.catalog import COMMON_POSES, Gender, Pose, poses_for_gender
from fitcheck.tracking.schedule import last_complete_check, next_photo_check, next_weight_check
from tests.helpers import full_check, photo, weight


class WeightCheckSchedulerTests(unittest.TestCase):
    def test_empty_history_is_due_today(self) -> None:
        today = date(2024, 1, 10)
        self.assertEqual(next_weight_check([], today), today)

    def test_next_check_is_seven_days_after_latest_log(self) -> None:
        today = date(2024, 1, 3)
        self.assertEqual(next_weight_check([weight("2024-01-01")], today), date(2024, 1, 8))

    def test_overdue_check_is_clamped_to_today(self) -> None:
        today = date(2024, 1, 10)
        self.assertEqual(next_weight_check([weight("2024-01-01")], today), today)

    def test_due_exactly_today_is_not_moved(self) -> None:
        today = date(2024, 1, 8)
        self.assertEqual(next_weight_check([weight("2024-01-01")], today), today)

    def test_history_order_does_not_matter(self) -> None:
        today = date(2024, 2, 1)
        history = [weight("2024-01-29"), weight("2024-01-15"), weight("2024-01-22")]
        self.assertEqual(next_weight_check(history, today), date(2024, 2, 5))
        self.assertEqual(next_weight_check(list(reversed(history)), today), date(2024, 2, 5))


class PhotoCheckSchedulerTests(unittest.TestCase):
    def test_no_photos_is_due_today(self) -> None:
        today = date(2024, 3, 1)
        self.assertEqual(next_photo_check([], COMMON_POSES, today), today)

    def test_complete_check_schedules_twenty_eight_days_later(self) -> None:
        today = date(2024, 1, 5)
        photos = full_check(COMMON_POSES, "2024-01-01")
        self.assertEqual(next_photo_check(photos, COMMON_POSES, today), date(2024, 1, 29))

    def test_past_due_is_clamped_to_today(self) -> None:
        today = date(2024, 3, 1)
        photos = full_check(COMMON_POSES, "2024-01-01")
        self.assertEqual(next_photo_check(photos, COMMON_POSES, today), today)

    def test_incomplete_dates_are_skipped(self) -> None:
        today = date(2024, 2, 10)
        photos = full_check(COMMON_POSES, "2024-01-01")
        # A later partial check does not count as complete.
        photos += full_check(COMMON_POSES[:3], "2024-02-01")
        self.assertEqual(last_complete_check(photos, COMMON_POSES), date(2024, 1, 1))
        self.assertEqual(next_photo_check(photos, COMMON_POSES, today), today)

    def test_most_recent_complete_check_wins(self) -> None:
        today = date(2024, 2, 10)
        photos = full_check(COMMON_POSES, "2024-02-05") + full_check(COMMON_POSES, "2024-01-01")
        self.assertEqual(next_photo_check(photos, COMMON_POSES, today), date(2024, 3, 4))

    def test_no_complete_date_is_due_today(self) -> None:
        today = date(2024, 2, 10)
        # Poses spread across days never form a complete check.
        photos = [photo(pose, f"2024-02-0{idx + 1}") for idx, pose in enumerate(COMMON_POSES)]
        self.assertIsNone(last_complete_check(photos, COMMON_POSES))
        self.assertEqual(next_photo_check(photos, COMMON_POSES, today), today)

    def test_gendered_catalog_requires_extra_poses(self) -> None:
        today = date(2024, 1, 5)
        male = poses_for_gender(Gender.MALE)
        photos = full_check(COMMON_POSES, "2024-01-01")
        self.assertEqual(next_photo_check(photos, male, today), today)
        photos += [photo(Pose.FRONT_BICEPS, "2024-01-01"), photo(Pose.BACK_BICEPS, "2024-01-01")]
        self.assertEqual(next_photo_check(photos, male, today), date(2024, 1, 29))


if __name__ == "__main__":
    unittest.main()
