from __future__ import annotations

from datetime import date
from typing import Iterable

from fitcheck.poses.catalog import Pose
from fitcheck.records import ProgressPhoto, WeightLogEntry


def weight(day: str, kg: float = 70.0, owner: str = "u1") -> WeightLogEntry:
    return WeightLogEntry(owner_id=owner, weight_kg=kg, log_date=date.fromisoformat(day))


def photo(pose: Pose, day: str, url: str = "", owner: str = "u1") -> ProgressPhoto:
    return ProgressPhoto(
        owner_id=owner,
        pose=pose,
        photo_url=url or f"media/{owner}/{day}_{pose.value}.jpg",
        check_date=date.fromisoformat(day),
    )


def full_check(poses: Iterable[Pose], day: str) -> list[ProgressPhoto]:
    return [photo(pose, day) for pose in poses]
