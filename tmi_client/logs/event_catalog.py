"""Human message templates for ``BotLogger.log_event``.

``event_templates.json`` maps ``domain -> action -> template``. The catalog
is flattened to ``(domain, action) -> template`` once at import.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def flatten_templates(raw: Any) -> dict[tuple[str, str], str]:
    """Flatten the nested JSON catalog, skipping non-string entries."""
    if not isinstance(raw, Mapping):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, template in actions.items()
        if isinstance(action, str) and isinstance(template, str)
    }


def load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Read a catalog file.

    A missing or unreadable file yields a single ``("app", "load_error")``
    entry; ``log_event`` falls back to derived messages for everything else.
    """
    path = path or TEMPLATES_PATH
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {("app", "load_error"): f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Unreadable event templates: {e}"[:200]}
    return flatten_templates(raw)


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = load_event_templates(path)


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "flatten_templates", "load_event_templates", "reload_event_templates"]
