"""Output handling utilities for reddit-researcher"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

LOG_PREFIX = "[reddit-researcher]"

# stdout is reserved for the JSON envelope
console = Console(stderr=True, emoji=False)


def log(message: str):
    """Write a progress line to stderr"""
    console.print(
        f"{LOG_PREFIX} {message}", markup=False, highlight=False, soft_wrap=True
    )


def ok_envelope(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"ok": True, "data": data}


def error_envelope(error: str) -> Dict[str, Any]:
    return {"ok": False, "error": error}


def render_envelope(envelope: Dict[str, Any]) -> str:
    """Serialize an envelope the same way every time"""
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def save_to_file(content: str, filepath: str):
    """Save rendered JSON to a file"""
    path = Path(filepath)

    # Create parent directories if they don't exist
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    log(f"Output saved to {filepath}")


def handle_output(envelope: Dict[str, Any], output_file: Optional[str] = None) -> int:
    """Emit the envelope to stdout (and optionally a file).

    Returns:
        The process exit code mirroring the envelope's ``ok`` flag.
    """
    text = render_envelope(envelope)

    if output_file:
        try:
            save_to_file(text, output_file)
        except OSError as exc:
            log(f"Failed to save output to {output_file}: {exc}")
            envelope = error_envelope(str(exc))
            text = render_envelope(envelope)

    click.echo(text)
    return 0 if envelope.get("ok") else 1
