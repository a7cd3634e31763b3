"""
Screenshot filmstrip renderer.

Produces a single HTML document that lays the frames of one pass side by
side (horizontal scroll, no wrapping), each image titled with its timestamp.
The frames are embedded as an inline JSON literal and turned into ``<img>``
elements by an inline script, so the file opens without a server or network.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from auditsave.core.contracts.screenshot import Screenshot

_STYLE = """\
html {
    overflow-x: scroll;
    overflow-y: hidden;
    height: 100%;
    background: linear-gradient(to left, #4CA1AF , #C4E0E5);
    background-attachment: fixed;
    padding: 10px;
}
body {
    white-space: nowrap;
    background: linear-gradient(to left, #4CA1AF , #C4E0E5);
    width: 100%;
    margin: 0;
}
img {
    margin: 4px;
}
"""

_TEMPLATE = """\
<!doctype html>
<title>screenshots</title>
<style>
{style}</style>
<body>
  <script>
    var shots = {shots};

    shots.forEach(function (s) {{
      var i = document.createElement('img');
      i.src = s.datauri;
      i.title = s.timestamp;
      document.body.appendChild(i);
    }});
  </script>
</body>
"""


def _as_screenshot(entry: Screenshot | Mapping[str, Any]) -> Screenshot:
    if isinstance(entry, Screenshot):
        return entry
    return Screenshot.model_validate(entry)


def _inline_json(value: Any) -> str:
    # "<\/" decodes to "</" in JS, so a payload can never close the script tag.
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def screenshot_dump(screenshots: Iterable[Screenshot | Mapping[str, Any]]) -> str:
    """Render `screenshots` (in the given order) as a filmstrip document."""
    shots = [_as_screenshot(s).model_dump() for s in screenshots]
    return _TEMPLATE.format(style=_STYLE, shots=_inline_json(shots))


__all__ = ["screenshot_dump"]
