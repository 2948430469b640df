# scripts/smoke.py
"""
Smoke test script for the Todate timeline pipeline.

Builds a small in-memory timeline (or loads an export), runs the view pipeline
with DEBUG logging, then replays a few pan/zoom gestures against the span
accumulator so the whole engine is exercised end to end.

Usage
-----
1. Test with the built-in sample:
    $ python scripts/smoke.py

2. Test with an export file:
    $ python scripts/smoke.py --file export.json
"""

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

import pendulum
from dotenv import load_dotenv
from pydantic import TypeAdapter

from todate.core.contracts.date_value import DayDate, MonthDate, SchoolDate
from todate.core.contracts.school import SchoolCalendarConfig
from todate.core.contracts.todate import Tag, Todate, build_todate
from todate.core.layout.span import apply_span_delta, pan_delta, wheel_zoom_delta
from todate.pipelines.timeline_view import build_timeline_view

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Test Data
# --------------------------------------------------------------------------- #
SCHOOL = SchoolCalendarConfig(
    reference_year=2000,
    start_month=9,
    start_day=1,
    repeated_grades=frozenset({3}),
)


def _sample() -> tuple[list[Todate], SchoolCalendarConfig]:
    work = Tag(id="work", name="Work", color="#2563eb")
    return (
        [
            build_todate(
                "Primary school",
                SchoolDate(school_year=1),
                SchoolDate(school_year=5, period=4),
                school_config=SCHOOL,
            ),
            build_todate("Moved house", MonthDate(year=2003, month=6), school_config=SCHOOL),
            build_todate(
                "Internship",
                MonthDate(year=2004, month=7),
                MonthDate(year=2004, month=9),
                tags=[work],
            ),
            build_todate("First day at work", DayDate(year=2012, month=1, day=9), tags=[work]),
        ],
        SCHOOL,
    )


def _load(path: Path) -> tuple[list[Todate], SchoolCalendarConfig | None]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        return TypeAdapter(list[Todate]).validate_python(data), None
    school = data.get("school")
    return (
        TypeAdapter(list[Todate]).validate_python(data.get("todates", [])),
        SchoolCalendarConfig.model_validate(school) if school else None,
    )


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run Todate Smoke Test")
    parser.add_argument("--file", "-f", type=str, help="Path to a JSON export")
    parser.add_argument("--height", type=float, default=600.0, help="Axis height in pixels")
    args = parser.parse_args()

    # 1. Prepare Input Data
    if args.file:
        input_path = Path(args.file)
        if not input_path.exists():
            print(f"❌ File not found: {input_path}")
            return
        print(f"\n📂 Using export: {input_path}")
        todates, school = _load(input_path)
    else:
        print("\n📝 Using built-in sample (No --file provided)")
        todates, school = _sample()

    # 2. Execution Phase
    try:
        view = build_timeline_view(
            todates,
            pixel_height=args.height,
            today_year=pendulum.now().year,
            school_config=school,
        )
    except Exception as exc:
        print(f"\n❌ Pipeline Crashed: {exc}")
        traceback.print_exc()
        return

    # 3. Inspection Phase
    print("\n" + "=" * 60)
    print("✅ Timeline built")
    print("=" * 60)

    for entry in view["entries"]:
        lane = "-" if entry["lane"] is None else entry["lane"]
        print(f"  [{lane}] {entry['title']}: {entry['label']}")

    span = view["span"]
    print(f"\n📏 Span: {span.start_year:.0f}-{span.end_year:.0f} ({view['lane_count']} lanes)")
    print(f"🔖 Ticks: {view['ticks']}")

    # 4. Gesture replay
    state = view["span_state"]
    for label, delta in (
        ("pan +0.4y", pan_delta(0.4)),
        ("pan +0.4y", pan_delta(0.4)),
        ("wheel in", wheel_zoom_delta(state, -1.0)),
        ("wheel out", wheel_zoom_delta(state, 1.0)),
    ):
        state = apply_span_delta(state, delta)
        pub = state.published
        print(
            f"  {label:<10} → window {state.start:.2f}-{state.end:.2f}, "
            f"published {pub.start_year:.0f}-{pub.end_year:.0f}"
        )


if __name__ == "__main__":
    main()
