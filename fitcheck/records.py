from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import math
from typing import Any, Optional

from .poses.catalog import Pose, parse_pose
from .utils.time import parse_date


@dataclass(frozen=True)
class WeightLogEntry:
    owner_id: str
    weight_kg: float
    log_date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "weight_kg": self.weight_kg,
            "log_date": self.log_date.isoformat(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "WeightLogEntry":
        log_date = parse_date(data.get("log_date"))
        if log_date is None:
            raise ValueError(f"Invalid log_date: {data.get('log_date')!r}")
        weight = float(data.get("weight_kg", data.get("weight", 0.0)))
        if not math.isfinite(weight) or weight <= 0:
            raise ValueError(f"Invalid weight: {weight!r}")
        return WeightLogEntry(
            owner_id=str(data.get("owner_id", data.get("user_id", ""))),
            weight_kg=weight,
            log_date=log_date,
        )


@dataclass(frozen=True)
class ProgressPhoto:
    owner_id: str
    pose: Pose
    photo_url: str
    check_date: date
    photo_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "photo_id": self.photo_id,
            "owner_id": self.owner_id,
            "pose": self.pose.value,
            "photo_url": self.photo_url,
            "check_date": self.check_date.isoformat(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ProgressPhoto":
        pose = parse_pose(data.get("pose"))
        if pose is None:
            raise ValueError(f"Unknown pose: {data.get('pose')!r}")
        check_date = parse_date(data.get("check_date"))
        if check_date is None:
            raise ValueError(f"Invalid check_date: {data.get('check_date')!r}")
        photo_id = data.get("photo_id", data.get("id"))
        return ProgressPhoto(
            owner_id=str(data.get("owner_id", data.get("user_id", ""))),
            pose=pose,
            photo_url=str(data.get("photo_url", "")),
            check_date=check_date,
            photo_id=str(photo_id) if photo_id not in (None, "") else None,
        )
