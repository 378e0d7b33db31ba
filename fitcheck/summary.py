from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, Optional

from .config import TrackerConfig
from .poses.catalog import Gender, Pose, pose_display_name, pose_guide_image, poses_for_gender
from .profile import OnboardingProfile
from .records import ProgressPhoto, WeightLogEntry
from .storage.backend import BackendError, LocalTrackerStore, TrackerBackend
from .tracking.comparison import PhotoComparison, select_comparisons
from .tracking.compliance import ComplianceState, evaluate
from .validation import (
    MAX_UPLOAD_BYTES,
    ValidationError,
    parse_weight,
    validate_pose_selection,
    validate_upload,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileSummary:
    owner_id: str
    gender: Gender
    required_poses: tuple[Pose, ...]
    weight_history: list[WeightLogEntry]
    photos: list[ProgressPhoto]
    compliance: ComplianceState
    comparisons: Dict[Pose, PhotoComparison] = field(default_factory=dict)

    @property
    def latest_weight(self) -> Optional[WeightLogEntry]:
        if not self.weight_history:
            return None
        return max(self.weight_history, key=lambda e: e.log_date)

    def latest_photos(self) -> Dict[Pose, ProgressPhoto]:
        return {
            pose: status.latest
            for pose, status in self.compliance.per_pose_status.items()
            if status.latest is not None
        }


def load_profile_summary(
    backend: TrackerBackend,
    owner_id: str,
    today: date,
    config: Optional[TrackerConfig] = None,
) -> ProfileSummary:
    cfg = config or TrackerConfig()
    gender = backend.fetch_gender(owner_id)
    weight_history = backend.fetch_weight_logs(owner_id)
    photos = backend.fetch_progress_photos(owner_id)
    required = poses_for_gender(gender)
    compliance = evaluate(
        weight_history,
        photos,
        required,
        today,
        weight_interval_days=cfg.weight_interval_days,
        photo_interval_days=cfg.photo_interval_days,
    )
    logger.debug(
        "Summary for %s: %d weight logs, %d photos, weight_overdue=%s photos_overdue=%s",
        owner_id,
        len(weight_history),
        len(photos),
        compliance.weight_overdue,
        compliance.photos_overdue,
    )
    return ProfileSummary(
        owner_id=owner_id,
        gender=gender,
        required_poses=required,
        weight_history=weight_history,
        photos=photos,
        compliance=compliance,
        comparisons=select_comparisons(photos, required),
    )


def due_reminders(state: ComplianceState) -> list[str]:
    messages: list[str] = []
    if state.weight_overdue:
        messages.append("Your weekly weight check is due. Please log your current weight.")
    if state.photos_overdue:
        messages.append(
            "Your 4-week progress photos are due. Please upload new photos for all required poses."
        )
        for pose in state.missing_poses:
            messages.append(f"  missing: {pose_display_name(pose)} (guide: {pose_guide_image(pose)})")
        for pose in state.stale_poses:
            days = state.per_pose_status[pose].days_since
            messages.append(f"  outdated: {pose_display_name(pose)} ({days} days old)")
    return messages


def log_weight(backend: TrackerBackend, owner_id: str, text: object, today: date) -> WeightLogEntry:
    weight = parse_weight(text)
    return backend.upsert_weight_log(owner_id, today, weight)


def complete_onboarding(
    store: LocalTrackerStore,
    owner_id: str,
    profile: OnboardingProfile,
    today: date,
) -> OnboardingProfile:
    profile = profile.model_copy(update={"onboarding_completed": True})
    store.save_onboarding(owner_id, profile)
    weight = profile.loggable_weight()
    if weight is not None:
        store.upsert_weight_log(owner_id, today, weight)
    return profile


def upload_progress_photo(
    backend: TrackerBackend,
    owner_id: str,
    pose: object,
    image_path: Path,
    today: date,
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = None,
) -> ProgressPhoto:
    required = poses_for_gender(backend.fetch_gender(owner_id))
    resolved = validate_pose_selection(pose, required)
    image_path = Path(image_path)
    if not image_path.is_file():
        raise ValidationError("Please select a pose and upload an image")
    kind = content_type or mimetypes.guess_type(image_path.name)[0]
    size = image_path.stat().st_size
    validate_upload(image_path.name, kind, size, max_bytes=max_bytes or MAX_UPLOAD_BYTES)
    try:
        image_bytes = image_path.read_bytes()
    except OSError as exc:
        raise BackendError(f"Failed to read {image_path.name}: {exc}") from exc
    photo_url = backend.upload_photo(owner_id, resolved, today, image_bytes, suffix=image_path.suffix or ".jpg")
    try:
        return backend.insert_photo_record(owner_id, resolved, today, photo_url)
    except BackendError:
        # No record points at the stored image, so drop it before re-raising.
        logger.warning("Removing unrecorded upload %s", photo_url)
        backend.delete_photo(photo_url)
        raise
