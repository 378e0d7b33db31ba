from __future__ import annotations

import math
from typing import Optional, Sequence

from .poses.catalog import Pose, parse_pose


MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class ValidationError(ValueError):
    """Input rejected before it reaches the tracker; the message is shown to the user."""


def parse_weight(text: object) -> float:
    raw = str(text if text is not None else "").strip().replace(",", ".")
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError("Please enter a valid weight") from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Please enter a valid weight")
    return value


def validate_pose_selection(pose: object, required_poses: Sequence[Pose]) -> Pose:
    resolved = parse_pose(pose)
    if resolved is None:
        raise ValidationError("Please select a pose and upload an image")
    if resolved not in required_poses:
        raise ValidationError(f"Pose '{resolved.value}' is not part of your photo check")
    return resolved


def validate_upload(
    file_name: str,
    content_type: Optional[str],
    size_bytes: int,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> None:
    if not file_name or size_bytes <= 0:
        raise ValidationError("Please select a pose and upload an image")
    if size_bytes > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ValidationError(f"File size exceeds {limit_mb:g}MB limit")
    if not str(content_type or "").startswith("image/"):
        raise ValidationError("Only image files are allowed")
