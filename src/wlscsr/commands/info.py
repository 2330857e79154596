"""Info command."""

import json
from typing import Any, Dict

from ..config import Config
from ..models import DisplayHandle
from ..providers import DisplayProvider
from ..session import DisplaySession


def _display_json(display: DisplayHandle, ignored: bool) -> Dict[str, Any]:
    data = display.to_dict()
    data["name"] = display.name
    data["ignored"] = ignored
    return data


def get_info_json(session: DisplaySession) -> Dict[str, Any]:
    """Get connected displays and snapshot location as JSON-serializable dict."""
    return {
        "fingerprint": session.fingerprint,
        "snapshot_path": str(session.snapshot_path),
        "snapshot_exists": session.store.exists(session.fingerprint),
        "heads": (
            [_display_json(d, False) for d in session.active]
            + [_display_json(d, True) for d in session.ignored]
        ),
    }


def show_info(config: Config, provider: DisplayProvider, json_output: bool = False) -> None:
    """
    Display connected heads and the snapshot path that would be used.

    Nothing is written or applied.
    """
    session = DisplaySession.open(config, provider)

    if json_output:
        print(json.dumps(get_info_json(session), indent=2))
        return

    print(f"{len(session.active) + len(session.ignored)} connected heads:")
    for display, marker in (
        [(d, "") for d in session.active] + [(d, " [ignored]") for d in session.ignored]
    ):
        print(f"* {display.name or ''}{marker}")
        print(f"  Make: {display.make}")
        print(f"  Model: {display.model}")
        print(f"  Serial: {display.serial}")

    saved = "saved" if session.store.exists(session.fingerprint) else "not saved"
    print(f"Configuration path: {session.snapshot_path} ({saved})")
