"""Extract filmstrip frames from the screenshot events of a trace.

Chrome records frames as instant events named ``Screenshot`` in the
``disabled-by-default-devtools.screenshot`` category, with the base64 JPEG in
``args.snapshot`` and the capture time in ``ts`` (microseconds).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from auditsave.core.contracts.screenshot import Screenshot

SCREENSHOT_CATEGORY = "disabled-by-default-devtools.screenshot"
SCREENSHOT_EVENT = "Screenshot"
_DATAURI_PREFIX = "data:image/jpg;base64,"


def _is_screenshot(event: Mapping[str, Any]) -> bool:
    return (
        event.get("name") == SCREENSHOT_EVENT
        and SCREENSHOT_CATEGORY in str(event.get("cat", ""))
        and isinstance(event.get("args"), Mapping)
        and "snapshot" in event["args"]
    )


def screenshots_from_trace(trace: Mapping[str, Any]) -> list[Screenshot]:
    """Return the screenshot frames of `trace` in trace-event order."""
    frames: list[Screenshot] = []
    for event in trace.get("traceEvents", []):
        if not isinstance(event, Mapping) or not _is_screenshot(event):
            continue
        frames.append(
            Screenshot(
                timestamp=event.get("ts", 0) / 1000,
                datauri=_DATAURI_PREFIX + str(event["args"]["snapshot"]),
            )
        )
    return frames


__all__ = ["screenshots_from_trace", "SCREENSHOT_CATEGORY", "SCREENSHOT_EVENT"]
