#!/usr/bin/env python3
"""
Render a saved AI plan response as text.

Reads a JSON response from one of the backend's AI endpoints (either the
full ``{"data": {...}}`` body or just the ``data`` object), normalizes it
and prints it the way the dashboard shows it.

Usage:
    python scripts/render_plan.py recommendations response.json
    python scripts/render_plan.py meal_plan meal_plan.json
    cat workout.json | python scripts/render_plan.py workout_plan -
"""

import sys
import json
import argparse
from pathlib import Path

# Make the src/ layout importable when run from a checkout
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from health_hub.plans import PlanKind, normalize_plan, render_lines  # noqa: E402


def load_payload(source: str):
    """Read JSON from a file path or stdin ('-'); unwrap a top-level 'data' key."""
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        # Not JSON: treat the whole thing as the model's raw answer
        return text
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    return body


def main():
    parser = argparse.ArgumentParser(
        description="Render a Health Hub AI plan response as text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/render_plan.py recommendations response.json
  python scripts/render_plan.py workout_plan - < workout.json
  python scripts/render_plan.py meal_plan meal_plan.json --json
        """,
    )
    parser.add_argument(
        "kind",
        choices=[k.value for k in PlanKind],
        help="Which AI endpoint the response came from",
    )
    parser.add_argument(
        "source",
        help="Path to the JSON response, or '-' for stdin",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the normalized view model as JSON instead of text",
    )
    args = parser.parse_args()

    plan = normalize_plan(args.kind, load_payload(args.source))

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False))
    else:
        for line in render_lines(plan):
            print(line)


if __name__ == "__main__":
    main()
