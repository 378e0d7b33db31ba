from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path

from .config import load_tracker_config
from .poses.catalog import pose_display_name
from .profile import OnboardingProfile
from .report import save_weight_chart
from .storage.backend import BackendError, LocalTrackerStore
from .summary import (
    complete_onboarding,
    due_reminders,
    load_profile_summary,
    log_weight,
    upload_progress_photo,
)
from .utils.time import parse_date
from .validation import ValidationError


def _date_arg(value: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', use YYYY-MM-DD.")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fitcheck",
        description="Weekly weight and 4-week progress photo check tracker.",
    )
    p.add_argument("--config", default=None, help="Tracker config YAML (default: config/tracker.yaml).")
    p.add_argument("--data-root", default=None, help="Override the data directory from the config.")
    p.add_argument("--today", type=_date_arg, default=None, help="Evaluate as of this date (YYYY-MM-DD).")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_status = sub.add_parser("status", help="Show next check dates and overdue reminders")
    p_status.add_argument("--owner", required=True)

    p_weight = sub.add_parser("log-weight", help="Log today's weight (replaces an entry for the same day)")
    p_weight.add_argument("--owner", required=True)
    p_weight.add_argument("weight", help="Weight in kg")

    p_photo = sub.add_parser("upload-photo", help="Upload a progress photo for one pose")
    p_photo.add_argument("--owner", required=True)
    p_photo.add_argument("--pose", required=True, help="Pose id or display name")
    p_photo.add_argument("image", help="Image file path")
    p_photo.add_argument("--content-type", default=None, help="MIME type (guessed from the file name).")

    p_compare = sub.add_parser("compare", help="List first/previous/current photos per pose")
    p_compare.add_argument("--owner", required=True)

    p_chart = sub.add_parser("chart", help="Save a weight history chart")
    p_chart.add_argument("--owner", required=True)
    p_chart.add_argument("--out", default=None, help="Output PNG (default: <data-root>/<owner>_weight.png)")

    p_onboard = sub.add_parser("onboard", help="Store onboarding answers")
    p_onboard.add_argument("--owner", required=True)
    p_onboard.add_argument("--gender", choices=["male", "female"], default=None)
    p_onboard.add_argument("--weight", type=float, default=None)
    p_onboard.add_argument("--height", type=float, default=None)
    p_onboard.add_argument("--goal", action="append", default=[], help="Repeat for several goals")

    return p


def _print_status(summary) -> None:
    state = summary.compliance
    print(f"Owner: {summary.owner_id} ({summary.gender.value})")
    latest = summary.latest_weight
    if latest is not None:
        print(f"Latest weight: {latest.weight_kg:.1f} kg on {latest.log_date.isoformat()}")
    print(f"Next weight check: {state.next_weight_check_due.isoformat()}")
    print(f"Next photo check: {state.next_photo_check_due.isoformat()}")
    print("Required poses:")
    for pose in summary.required_poses:
        status = state.per_pose_status[pose]
        if not status.present:
            mark = "missing"
        elif status.recent:
            mark = f"ok ({status.days_since}d)"
        else:
            mark = f"outdated ({status.days_since}d)"
        print(f"  {pose_display_name(pose)}: {mark}")
    reminders = due_reminders(state)
    if reminders:
        print("--- Due ---")
        for line in reminders:
            print(line)


def _print_comparisons(summary) -> None:
    for pose in summary.required_poses:
        comp = summary.comparisons[pose]
        if comp.is_empty:
            print(f"{pose_display_name(pose)}: no photos yet")
            continue
        slots = ", ".join(f"{slot} {photo.check_date.isoformat()}" for slot, photo in comp.visible())
        print(f"{pose_display_name(pose)}: {slots}")


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s | %(name)s | %(message)s",
    )
    cfg = load_tracker_config(Path(args.config) if args.config else None)
    root = Path(args.data_root) if args.data_root else cfg.data_root
    today = args.today or date.today()

    try:
        store = LocalTrackerStore(root=root)

        if args.cmd == "status":
            _print_status(load_profile_summary(store, args.owner, today, config=cfg))
            return 0

        if args.cmd == "log-weight":
            entry = log_weight(store, args.owner, args.weight, today)
            print(f"Logged {entry.weight_kg:.1f} kg on {entry.log_date.isoformat()}")
            return 0

        if args.cmd == "upload-photo":
            photo = upload_progress_photo(
                store,
                args.owner,
                args.pose,
                Path(args.image),
                today,
                content_type=args.content_type,
                max_bytes=cfg.max_upload_bytes,
            )
            print(f"Uploaded {pose_display_name(photo.pose)}: {photo.photo_url}")
            return 0

        if args.cmd == "compare":
            _print_comparisons(load_profile_summary(store, args.owner, today, config=cfg))
            return 0

        if args.cmd == "chart":
            out = Path(args.out) if args.out else root / f"{args.owner}_weight.png"
            history = store.fetch_weight_logs(args.owner)
            if not history:
                print("No weight logs yet. Use log-weight first.")
                return 1
            save_weight_chart(history, out, title=f"Weight history - {args.owner}")
            print(f"Saved: {out}")
            return 0

        if args.cmd == "onboard":
            profile = OnboardingProfile(
                gender=args.gender,
                weight_kg=args.weight,
                height_cm=args.height,
                goals=list(args.goal),
            )
            complete_onboarding(store, args.owner, profile, today)
            print(f"Saved onboarding for {args.owner}")
            return 0
    except ValidationError as exc:
        print(f"Error: {exc}")
        return 1
    except BackendError as exc:
        print(f"Error: {exc}")
        print("Please try again.")
        return 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
