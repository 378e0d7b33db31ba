from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..poses.catalog import Pose
from ..records import ProgressPhoto, WeightLogEntry
from ..utils.time import add_days, clamp_to_today


WEIGHT_CHECK_INTERVAL_DAYS = 7
PHOTO_CHECK_INTERVAL_DAYS = 28


def latest_weight_log(history: Iterable[WeightLogEntry]) -> Optional[WeightLogEntry]:
    ordered = sorted(history, key=lambda e: e.log_date, reverse=True)
    return ordered[0] if ordered else None


def next_weight_check(
    history: Sequence[WeightLogEntry],
    today: date,
    interval_days: int = WEIGHT_CHECK_INTERVAL_DAYS,
) -> date:
    latest = latest_weight_log(history)
    if latest is None:
        return today
    return clamp_to_today(add_days(latest.log_date, interval_days), today)


def last_complete_check(
    photos: Iterable[ProgressPhoto],
    required_poses: Sequence[Pose],
) -> Optional[date]:
    """Most recent check date on which every required pose was photographed."""
    poses_by_date: dict[date, set[Pose]] = defaultdict(set)
    for photo in photos:
        poses_by_date[photo.check_date].add(photo.pose)
    required = set(required_poses)
    for check_date in sorted(poses_by_date, reverse=True):
        if required <= poses_by_date[check_date]:
            return check_date
    return None


def next_photo_check(
    photos: Sequence[ProgressPhoto],
    required_poses: Sequence[Pose],
    today: date,
    interval_days: int = PHOTO_CHECK_INTERVAL_DAYS,
) -> date:
    if not photos:
        return today
    complete = last_complete_check(photos, required_poses)
    if complete is None:
        return today
    return clamp_to_today(add_days(complete, interval_days), today)
