# scripts/smoke.py
"""
Smoke Test Script for the auditsave pipeline.

Usage
-----
1. Run against a built-in two-pass bundle with synthetic frames:
    $ uv run python scripts/smoke.py

2. Run against a saved artifacts file (``{"traces": {...}}``):
    $ uv run python scripts/smoke.py --file run.artifacts.json --out artifacts/smoke
"""

import argparse
import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from auditsave.core.contracts.artifacts import Artifacts
from auditsave.core.naming import get_filename_prefix
from auditsave.pipelines.asset_saver import save_artifacts, save_assets

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
DEFAULT_URL = "https://example.com/"
# 1x1 transparent GIF
PIXEL = "R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"


def _demo_trace(offset_us: int) -> dict[str, object]:
    events: list[dict[str, object]] = [
        {"name": "navigationStart", "ts": offset_us, "pid": 1, "tid": 1, "ph": "R"}
    ]
    for i in range(5):
        events.append(
            {
                "name": "Screenshot",
                "cat": "disabled-by-default-devtools.screenshot",
                "ts": offset_us + i * 250_000,
                "ph": "O",
                "args": {"snapshot": PIXEL},
            }
        )
    return {"traceEvents": events}


DEFAULT_AUDITS = {
    "first-contentful-paint": {"numericValue": 640.0},
    "speed-index": {"numericValue": 910.0},
    "interactive": {"numericValue": 1800.0},
}


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run auditsave Smoke Test")
    parser.add_argument("--file", "-f", type=str, help="Path to an artifacts JSON file")
    parser.add_argument("--out", "-o", type=str, default="artifacts/smoke")
    args = parser.parse_args()

    # 1. Prepare Input Data
    if args.file:
        input_path = Path(args.file)
        if not input_path.exists():
            print(f"❌ File not found: {input_path}")
            return
        print(f"\n📂 Using artifacts file: {input_path}")
        data = json.loads(input_path.read_text(encoding="utf-8"))
        artifacts = Artifacts.from_traces(data["traces"])
    else:
        print("\n📝 Using built-in demo bundle (No --file provided)")
        artifacts = Artifacts.from_traces(
            {"defaultPass": _demo_trace(1_000_000), "offlinePass": _demo_trace(9_000_000)},
            url=DEFAULT_URL,
        )

    base_path = Path(args.out) / get_filename_prefix({"url": DEFAULT_URL})

    # 2. Execution Phase
    try:
        written = asyncio.run(
            save_assets(artifacts, DEFAULT_AUDITS, base_path, write_manifest=True)
        )
        written.append(save_artifacts(artifacts, base_path))
    except Exception as exc:
        print(f"\n❌ Pipeline Crashed: {exc}")
        traceback.print_exc()
        return

    # 3. Inspection Phase
    print("\n" + "=" * 60)
    print("✅ Assets Saved Successfully!")
    print("=" * 60)
    for path in written:
        print(f"  - {path} ({path.stat().st_size} bytes)")


if __name__ == "__main__":
    main()
