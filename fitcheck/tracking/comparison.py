from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Sequence

from ..poses.catalog import Pose
from ..records import ProgressPhoto


@dataclass(frozen=True)
class PhotoComparison:
    """Up to three photos of one pose: the first ever, the one before the latest, the latest.

    Slots are always filled when data exists. With a single check date the
    same record sits in ``first`` and ``current``; the ``show_*`` flags tell
    the caller which slots are worth rendering.
    """

    pose: Pose
    first: Optional[ProgressPhoto] = None
    previous: Optional[ProgressPhoto] = None
    current: Optional[ProgressPhoto] = None

    @property
    def is_empty(self) -> bool:
        return self.first is None and self.current is None

    @property
    def show_first(self) -> bool:
        return self.first is not None

    @property
    def show_previous(self) -> bool:
        return self.previous is not None and self.previous is not self.first

    @property
    def show_current(self) -> bool:
        return (
            self.current is not None
            and self.current is not self.previous
            and self.current is not self.first
        )

    def visible(self) -> list[tuple[str, ProgressPhoto]]:
        out: list[tuple[str, ProgressPhoto]] = []
        if self.show_first and self.first is not None:
            out.append(("first", self.first))
        if self.show_previous and self.previous is not None:
            out.append(("previous", self.previous))
        if self.show_current and self.current is not None:
            out.append(("current", self.current))
        return out


def select_comparisons(
    photos: Sequence[ProgressPhoto],
    required_poses: Sequence[Pose],
) -> Dict[Pose, PhotoComparison]:
    by_pose: Dict[Pose, Dict[date, ProgressPhoto]] = {pose: {} for pose in required_poses}
    for photo in photos:
        dated = by_pose.get(photo.pose)
        if dated is None:
            continue
        # Several photos for one pose on one day: keep the first in input order.
        dated.setdefault(photo.check_date, photo)

    result: Dict[Pose, PhotoComparison] = {}
    for pose, dated in by_pose.items():
        if not dated:
            result[pose] = PhotoComparison(pose=pose)
            continue
        dates = sorted(dated)
        result[pose] = PhotoComparison(
            pose=pose,
            first=dated[dates[0]],
            previous=dated[dates[-2]] if len(dates) > 1 else None,
            current=dated[dates[-1]],
        )
    return result
