from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional, Sequence

from ..poses.catalog import Pose
from ..records import ProgressPhoto, WeightLogEntry
from ..utils.time import days_since
from .schedule import (
    PHOTO_CHECK_INTERVAL_DAYS,
    WEIGHT_CHECK_INTERVAL_DAYS,
    latest_weight_log,
    next_photo_check,
    next_weight_check,
)


@dataclass(frozen=True)
class PoseStatus:
    pose: Pose
    latest: Optional[ProgressPhoto] = None
    days_since: Optional[int] = None
    recent: bool = False

    @property
    def present(self) -> bool:
        return self.latest is not None


@dataclass(frozen=True)
class ComplianceState:
    next_weight_check_due: date
    next_photo_check_due: date
    weight_overdue: bool
    photos_overdue: bool
    per_pose_status: Dict[Pose, PoseStatus] = field(default_factory=dict)

    @property
    def missing_poses(self) -> list[Pose]:
        return [pose for pose, status in self.per_pose_status.items() if not status.present]

    @property
    def stale_poses(self) -> list[Pose]:
        return [
            pose
            for pose, status in self.per_pose_status.items()
            if status.present and not status.recent
        ]


def latest_photo_by_pose(
    photos: Iterable[ProgressPhoto],
    required_poses: Sequence[Pose],
) -> Dict[Pose, Optional[ProgressPhoto]]:
    latest: Dict[Pose, Optional[ProgressPhoto]] = {pose: None for pose in required_poses}
    for photo in photos:
        if photo.pose not in latest:
            continue
        current = latest[photo.pose]
        # Ties on check_date keep the first record seen.
        if current is None or photo.check_date > current.check_date:
            latest[photo.pose] = photo
    return latest


def is_weight_overdue(
    history: Sequence[WeightLogEntry],
    today: date,
    interval_days: int = WEIGHT_CHECK_INTERVAL_DAYS,
) -> bool:
    latest = latest_weight_log(history)
    if latest is None:
        return True
    return days_since(latest.log_date, today) > interval_days


def pose_statuses(
    photos: Sequence[ProgressPhoto],
    required_poses: Sequence[Pose],
    today: date,
    freshness_days: int = PHOTO_CHECK_INTERVAL_DAYS,
) -> Dict[Pose, PoseStatus]:
    statuses: Dict[Pose, PoseStatus] = {}
    for pose, photo in latest_photo_by_pose(photos, required_poses).items():
        if photo is None:
            statuses[pose] = PoseStatus(pose=pose)
            continue
        age = days_since(photo.check_date, today)
        statuses[pose] = PoseStatus(pose=pose, latest=photo, days_since=age, recent=age <= freshness_days)
    return statuses


def evaluate(
    weight_history: Sequence[WeightLogEntry],
    photos: Sequence[ProgressPhoto],
    required_poses: Sequence[Pose],
    today: date,
    weight_interval_days: int = WEIGHT_CHECK_INTERVAL_DAYS,
    photo_interval_days: int = PHOTO_CHECK_INTERVAL_DAYS,
) -> ComplianceState:
    statuses = pose_statuses(photos, required_poses, today, freshness_days=photo_interval_days)
    photos_ok = all(status.present and status.recent for status in statuses.values())
    return ComplianceState(
        next_weight_check_due=next_weight_check(weight_history, today, interval_days=weight_interval_days),
        next_photo_check_due=next_photo_check(
            photos, required_poses, today, interval_days=photo_interval_days
        ),
        weight_overdue=is_weight_overdue(weight_history, today, interval_days=weight_interval_days),
        photos_overdue=not photos_ok,
        per_pose_status=statuses,
    )
