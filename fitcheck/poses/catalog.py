from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class Pose(str, Enum):
    FRONT_ARMS_DOWN = "front-arms-down"
    SIDE_LEFT_ARMS_DOWN = "side-left-arms-down"
    SIDE_LEFT_ARMS_FORWARD = "side-left-arms-forward"
    SIDE_RIGHT_ARMS_DOWN = "side-right-arms-down"
    SIDE_RIGHT_ARMS_FORWARD = "side-right-arms-forward"
    BACK_ARMS_DOWN = "back-arms-down"
    FRONT_BICEPS = "front-biceps"
    BACK_BICEPS = "back-biceps"
    BACK_ARMS_EXTENDED = "back-arms-extended"


@dataclass(frozen=True)
class PoseDef:
    pose: Pose
    display: str
    guide_image: str


POSES: Dict[Pose, PoseDef] = {
    Pose.FRONT_ARMS_DOWN: PoseDef(Pose.FRONT_ARMS_DOWN, "Front with arms down", "front.png"),
    Pose.FRONT_BICEPS: PoseDef(Pose.FRONT_BICEPS, "Front double biceps", "biceps.png"),
    Pose.SIDE_LEFT_ARMS_DOWN: PoseDef(Pose.SIDE_LEFT_ARMS_DOWN, "Left side with arms down", "left.png"),
    Pose.SIDE_LEFT_ARMS_FORWARD: PoseDef(
        Pose.SIDE_LEFT_ARMS_FORWARD, "Left side with arms forward", "left_arms.png"
    ),
    Pose.SIDE_RIGHT_ARMS_DOWN: PoseDef(Pose.SIDE_RIGHT_ARMS_DOWN, "Right side with arms down", "right.png"),
    Pose.SIDE_RIGHT_ARMS_FORWARD: PoseDef(
        Pose.SIDE_RIGHT_ARMS_FORWARD, "Right side with arms forward", "right_arms.png"
    ),
    Pose.BACK_ARMS_DOWN: PoseDef(Pose.BACK_ARMS_DOWN, "Back with arms down", "back.png"),
    Pose.BACK_ARMS_EXTENDED: PoseDef(Pose.BACK_ARMS_EXTENDED, "Back with arms extended", "back_arms.png"),
    Pose.BACK_BICEPS: PoseDef(Pose.BACK_BICEPS, "Back double biceps", "back_biceps.png"),
}


COMMON_POSES: Tuple[Pose, ...] = (
    Pose.FRONT_ARMS_DOWN,
    Pose.SIDE_LEFT_ARMS_DOWN,
    Pose.SIDE_LEFT_ARMS_FORWARD,
    Pose.SIDE_RIGHT_ARMS_DOWN,
    Pose.SIDE_RIGHT_ARMS_FORWARD,
    Pose.BACK_ARMS_DOWN,
)

_GENDER_EXTRAS: Dict[Gender, Tuple[Pose, ...]] = {
    Gender.MALE: (Pose.FRONT_BICEPS, Pose.BACK_BICEPS),
    Gender.FEMALE: (Pose.BACK_ARMS_EXTENDED,),
    Gender.UNSPECIFIED: (),
}

_GENDER_ALIASES: Dict[str, Gender] = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "man": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
    "woman": Gender.FEMALE,
}


def parse_gender(value: object) -> Gender:
    if isinstance(value, Gender):
        return value
    normalized = str(value or "").strip().lower()
    return _GENDER_ALIASES.get(normalized, Gender.UNSPECIFIED)


def poses_for_gender(gender: object) -> Tuple[Pose, ...]:
    resolved = parse_gender(gender)
    return COMMON_POSES + _GENDER_EXTRAS[resolved]


def _norm_text(text: str) -> str:
    cleaned = "".join(ch.lower() if ch.isalnum() else " " for ch in text)
    return " ".join(cleaned.split())


def parse_pose(value: object) -> Optional[Pose]:
    if isinstance(value, Pose):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return Pose(text.lower())
    except ValueError:
        pass
    target = _norm_text(text)
    for pose, pose_def in POSES.items():
        if target in (_norm_text(pose.value), _norm_text(pose_def.display)):
            return pose
    return None


def pose_display_name(pose: object) -> str:
    resolved = parse_pose(pose)
    if resolved is not None:
        return POSES[resolved].display
    # Unknown identifiers render as title-cased words.
    return " ".join(word.capitalize() for word in str(pose or "").split("-") if word)


def pose_guide_image(pose: Pose) -> str:
    return POSES[pose].guide_image
