"""Value and TTL presentation for the value pane and TTL dialog."""

from __future__ import annotations

import json
from dataclasses import dataclass

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.util import ClassNotFound

from .client import StoreClient

TTL_NO_EXPIRATION = -1
TTL_MISSING_KEY = -2

_FORMATTERS: dict[str, TerminalFormatter] = {}


@dataclass(frozen=True)
class TTLInfo:
    raw_ttl: int
    display: str
    has_expiration: bool
    exists: bool


def format_ttl(ttl: int) -> TTLInfo:
    """Translate a Redis ``TTL`` reply into display text and flags."""
    if ttl == TTL_NO_EXPIRATION:
        return TTLInfo(ttl, "No expiration", has_expiration=False, exists=True)
    if ttl == TTL_MISSING_KEY:
        return TTLInfo(ttl, "Key does not exist", has_expiration=False, exists=False)
    hours, rest = divmod(ttl, 3600)
    minutes, seconds = divmod(rest, 60)
    return TTLInfo(ttl, f"{hours}h {minutes}m {seconds}s", has_expiration=True, exists=True)


def format_ttl_details(ttl: int) -> str:
    info = format_ttl(ttl)
    if not info.has_expiration:
        return info.display
    return f"{ttl} seconds\n({info.display})"


def ttl_message(client: StoreClient, key: str) -> str:
    """Text for the TTL dialog of ``key``."""
    ttl = int(client.ttl(key))
    info = format_ttl(ttl)
    if not info.exists:
        return f"Key: {key}\n\nKey does not exist"
    if not info.has_expiration:
        return f"Key: {key}\n\nNo expiration set"
    return f"Key: {key}\n\nTTL: {format_ttl_details(ttl)}"


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        try:
            formatter = TerminalFormatter(style=style)
        except ClassNotFound:
            formatter = TerminalFormatter()
        _FORMATTERS[style] = formatter
    return formatter


def colorize_json_value(value: str, style: str = "monokai") -> str | None:
    """Pretty-print and highlight ``value`` when it holds a JSON object or array.

    Returns ``None`` for anything that is not a JSON container.
    """
    stripped = value.strip()
    if not stripped or stripped[0] not in "[{":
        return None
    try:
        parsed = json.loads(stripped)
    except ValueError:
        return None
    pretty = json.dumps(parsed, indent=2, ensure_ascii=False)
    try:
        return pygments_highlight(pretty, JsonLexer(), _formatter_for_style(style)).rstrip("\n")
    except Exception:
        return pretty


def _format_score(score: float) -> str:
    score = float(score)
    return str(int(score)) if score.is_integer() else repr(score)


def _string_body(value: object, colorize: bool, style: str) -> str:
    text = "" if value is None else str(value)
    if colorize:
        highlighted = colorize_json_value(text, style)
        if highlighted is not None:
            return highlighted
    return text


def fetch_key_info(client: StoreClient, key: str, colorize: bool = False, style: str = "monokai") -> str:
    """Describe ``key``: a ``Type | TTL`` header, a blank line, then the value.

    Store errors are folded into the returned text so the value pane can show
    them in place.
    """
    try:
        key_type = str(client.type(key))
        ttl_display = format_ttl(int(client.ttl(key))).display

        if key_type == "string":
            body = _string_body(client.get(key), colorize, style)
            return f"Type: STRING | TTL: {ttl_display}\n\n{body}"
        if key_type == "list":
            items = client.lrange(key, 0, -1)
            body = "\n".join(f"[{idx}] {item}" for idx, item in enumerate(items))
            return f"Type: LIST ({len(items)} items) | TTL: {ttl_display}\n\n{body}"
        if key_type == "set":
            members = sorted(client.smembers(key))
            body = "\n".join(str(member) for member in members)
            return f"Type: SET ({len(members)} members) | TTL: {ttl_display}\n\n{body}"
        if key_type == "zset":
            scored = client.zrange(key, 0, -1, withscores=True)
            body = "\n".join(f"{_format_score(score)}: {member}" for member, score in scored)
            return f"Type: SORTED SET ({len(scored)} members) | TTL: {ttl_display}\n\n{body}"
        if key_type == "hash":
            fields = client.hgetall(key)
            body = "\n".join(f"{field}: {value}" for field, value in fields.items())
            return f"Type: HASH ({len(fields)} fields) | TTL: {ttl_display}\n\n{body}"
        return f"Type: {key_type.upper()} | TTL: {ttl_display}\n\nUnsupported type"
    except Exception as exc:
        return f"Error fetching value: {exc}"
