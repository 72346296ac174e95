"""Option defaults loaded from / saved to JSON or CSV settings files."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Any, Iterable

SETTINGS_FLAGS = ("--settings", "--save-settings")
EXCLUDED_DESTS = {"settings_path", "save_settings_path", "command", "func"}


def add_settings_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--settings",
        dest="settings_path",
        default=None,
        help="Load option defaults from a settings file (json or csv).",
    )
    parser.add_argument(
        "--save-settings",
        dest="save_settings_path",
        default=None,
        help="Save current option values to a settings file (json or csv).",
    )


def strip_settings_args(
    argv: Iterable[str],
) -> tuple[list[str], str | None, str | None]:
    """
    Remove ``--settings``/``--save-settings`` from ``argv`` so they can be
    handled before the real parser runs.

    Returns (remaining argv, settings path, save path).
    """
    cleaned: list[str] = []
    found: dict[str, str | None] = {flag: None for flag in SETTINGS_FLAGS}

    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        flag, sep, value = arg.partition("=")
        if flag in found:
            if not sep:
                if i + 1 >= len(args):
                    raise SystemExit(f"{flag} requires a path.")
                value = args[i + 1]
                i += 1
            found[flag] = value
        else:
            cleaned.append(arg)
        i += 1

    return cleaned, found["--settings"], found["--save-settings"]


def detect_command(argv: Iterable[str]) -> str | None:
    for arg in argv:
        if not arg.startswith("-"):
            return arg
    return None


def _parse_csv_value(raw: str) -> Any:
    text = raw.strip()
    if text == "":
        return ""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _load_csv(path: Path) -> dict[str, Any]:
    data: dict[str, Any] = {}
    with path.open("r", newline="", encoding="utf-8") as handle:
        for row in csv.reader(handle):
            if not row or not row[0].strip():
                continue
            key = row[0].strip()
            if key.lower() == "key" and len(row) > 1 and row[1].strip().lower() == "value":
                continue  # header
            data[key] = _parse_csv_value(row[1]) if len(row) > 1 else ""
    return data


def _save_csv(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["key", "value"])
        for key in sorted(data):
            writer.writerow([key, json.dumps(data[key], ensure_ascii=True)])


def load_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SystemExit(f"Settings file not found: {path}")
    if path.suffix.lower() == ".csv":
        return _load_csv(path)

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Settings file is not valid JSON: {path} ({exc})") from exc
    if isinstance(data, dict):
        return data
    raise SystemExit(f"Settings file must be a JSON object: {path}")


def save_settings(
    path: Path,
    settings: dict[str, Any],
    *,
    command: str | None = None,
) -> None:
    """
    Write ``settings`` to ``path``. For JSON with a ``command``, the values
    are stored under that command's key and other commands' sections in an
    existing file are preserved.
    """
    if path.suffix.lower() == ".csv":
        _save_csv(path, settings)
        return

    data: dict[str, Any] = settings
    if command:
        existing: dict[str, Any] = {}
        if path.exists():
            try:
                existing = load_settings(path)
            except SystemExit:
                existing = {}
        if existing and all(not isinstance(v, dict) for v in existing.values()):
            existing = {"default": existing}
        existing[command] = settings
        data = existing

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=True)
        handle.write("\n")


def select_settings(
    data: dict[str, Any],
    command: str | None,
) -> dict[str, Any]:
    """Pick the section for ``command``, else ``default``, else a flat mapping."""
    if command and isinstance(data.get(command), dict):
        return dict(data[command])
    if isinstance(data.get("default"), dict):
        return dict(data["default"])
    if all(not isinstance(v, dict) for v in data.values()):
        return dict(data)
    return {}


def _option_actions(parser: argparse.ArgumentParser) -> list[argparse.Action]:
    return [action for action in parser._actions if action.option_strings]


def apply_settings_to_parser(
    parser: argparse.ArgumentParser,
    settings: dict[str, Any],
) -> None:
    for action in _option_actions(parser):
        if action.dest in settings:
            action.default = settings[action.dest]
            action.required = False


def _coerce_value(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, tuple):
        return list(value)
    return value


def serialize_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for action in _option_actions(parser):
        if action.dest in EXCLUDED_DESTS or action.dest == "help":
            continue
        out[action.dest] = _coerce_value(getattr(args, action.dest, None))
    return out


def find_subparser(
    parser: argparse.ArgumentParser,
    command: str | None,
) -> argparse.ArgumentParser | None:
    if not command:
        return None
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices.get(command)
    return None
