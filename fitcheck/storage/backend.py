from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from ..poses.catalog import Gender, Pose
from ..profile import OnboardingProfile
from ..records import ProgressPhoto, WeightLogEntry


logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """A storage call failed; the caller shows the message and the user retries."""


class TrackerBackend(Protocol):
    def fetch_weight_logs(self, owner_id: str) -> list[WeightLogEntry]: ...

    def fetch_progress_photos(self, owner_id: str) -> list[ProgressPhoto]: ...

    def fetch_gender(self, owner_id: str) -> Gender: ...

    def upsert_weight_log(self, owner_id: str, log_date: date, weight_kg: float) -> WeightLogEntry: ...

    def upload_photo(
        self,
        owner_id: str,
        pose: Pose,
        check_date: date,
        image_bytes: bytes,
        suffix: str = ".jpg",
    ) -> str: ...

    def insert_photo_record(
        self,
        owner_id: str,
        pose: Pose,
        check_date: date,
        photo_url: str,
    ) -> ProgressPhoto: ...

    def delete_photo(self, photo_url: str) -> None: ...


@dataclass
class LocalTrackerStore:
    """JSON-file stand-in for the hosted backend, one directory per owner."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _sanitize_owner_id(self, owner_id: str) -> str:
        safe = "".join(ch for ch in str(owner_id) if ch.isalnum() or ch in ("-", "_"))
        if not safe:
            raise BackendError(f"Invalid owner id: {owner_id!r}")
        return safe

    def owner_dir(self, owner_id: str) -> Path:
        return self.root / "owners" / self._sanitize_owner_id(owner_id)

    def media_dir(self, owner_id: str) -> Path:
        return self.root / "media" / self._sanitize_owner_id(owner_id)

    def resolve_photo_url(self, photo_url: str) -> Path:
        return self.root / photo_url

    def delete_photo(self, photo_url: str) -> None:
        path = self.resolve_photo_url(photo_url)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise BackendError(f"Failed to delete photo: {exc}") from exc

    def _read_rows(self, path: Path) -> list[Any]:
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise BackendError(f"Failed to read {path.name}: {exc}") from exc
        if not isinstance(data, list):
            raise BackendError(f"Corrupt table {path.name}: expected a list")
        return data

    def _write_json(self, path: Path, payload: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(path.suffix + ".tmp")
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise BackendError(f"Failed to write {path.name}: {exc}") from exc

    def fetch_weight_logs(self, owner_id: str) -> list[WeightLogEntry]:
        entries: list[WeightLogEntry] = []
        for row in self._read_rows(self.owner_dir(owner_id) / "weight_logs.json"):
            if not isinstance(row, dict):
                continue
            try:
                entries.append(WeightLogEntry.from_dict(row))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping weight log row for %s: %s", owner_id, exc)
        entries.sort(key=lambda e: e.log_date)
        return entries

    def fetch_progress_photos(self, owner_id: str) -> list[ProgressPhoto]:
        photos: list[ProgressPhoto] = []
        for row in self._read_rows(self.owner_dir(owner_id) / "progress_photos.json"):
            if not isinstance(row, dict):
                continue
            try:
                photos.append(ProgressPhoto.from_dict(row))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping photo row for %s: %s", owner_id, exc)
        return photos

    def fetch_onboarding(self, owner_id: str) -> Optional[OnboardingProfile]:
        path = self.owner_dir(owner_id) / "onboarding.json"
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return OnboardingProfile.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as exc:
            raise BackendError(f"Failed to read onboarding data: {exc}") from exc

    def fetch_gender(self, owner_id: str) -> Gender:
        profile = self.fetch_onboarding(owner_id)
        if profile is None:
            return Gender.UNSPECIFIED
        return profile.gender

    def save_onboarding(self, owner_id: str, profile: OnboardingProfile) -> None:
        path = self.owner_dir(owner_id) / "onboarding.json"
        self._write_json(path, json.loads(profile.model_dump_json(by_alias=True)))

    def upsert_weight_log(self, owner_id: str, log_date: date, weight_kg: float) -> WeightLogEntry:
        path = self.owner_dir(owner_id) / "weight_logs.json"
        entry = WeightLogEntry(owner_id=str(owner_id), weight_kg=float(weight_kg), log_date=log_date)
        rows = [
            row
            for row in self._read_rows(path)
            if not (isinstance(row, dict) and str(row.get("log_date", ""))[:10] == log_date.isoformat())
        ]
        rows.append(entry.to_dict())
        rows.sort(key=lambda row: str(row.get("log_date", "")) if isinstance(row, dict) else "")
        self._write_json(path, rows)
        logger.info("Logged %.1f kg for %s on %s", entry.weight_kg, owner_id, log_date.isoformat())
        return entry

    def upload_photo(
        self,
        owner_id: str,
        pose: Pose,
        check_date: date,
        image_bytes: bytes,
        suffix: str = ".jpg",
    ) -> str:
        suffix = suffix if suffix.startswith(".") else f".{suffix}"
        fname = f"{check_date.isoformat()}_{pose.value}_{uuid.uuid4().hex[:8]}{suffix.lower()}"
        out_path = self.media_dir(owner_id) / fname
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(image_bytes)
        except OSError as exc:
            raise BackendError(f"Failed to store photo: {exc}") from exc
        return out_path.relative_to(self.root).as_posix()

    def insert_photo_record(
        self,
        owner_id: str,
        pose: Pose,
        check_date: date,
        photo_url: str,
    ) -> ProgressPhoto:
        path = self.owner_dir(owner_id) / "progress_photos.json"
        photo = ProgressPhoto(
            owner_id=str(owner_id),
            pose=pose,
            photo_url=photo_url,
            check_date=check_date,
            photo_id=uuid.uuid4().hex,
        )
        rows = self._read_rows(path)
        rows.append(photo.to_dict())
        self._write_json(path, rows)
        logger.info("Stored %s photo for %s on %s", pose.value, owner_id, check_date.isoformat())
        return photo
