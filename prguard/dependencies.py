"""Dependency manifest diffing.

Compares the manifest file (``package.json`` by default) before and after a
pull request and describes added, removed and updated entries.
"""
import json
from typing import Any, Dict, List, Optional

from .models import JSONDiffEntry, ReportLevel, ReportMessage

NOUNS = {
    "dependencies": ("dependency", "dependencies"),
    "devDependencies": ("devDependency", "devDependencies"),
}


def parse_manifest(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a manifest snapshot.

    A missing file (``None``) is an empty document. Malformed JSON, or a
    document that is not an object, gives ``None``: there is no usable data.
    """
    if text is None:
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data


def _members(value: Any) -> List[str]:
    if isinstance(value, dict):
        return [str(key) for key in value]
    if isinstance(value, list):
        return [item if isinstance(item, str) else json.dumps(item) for item in value]
    return []


def json_diff(before: Optional[Dict[str, Any]], after: Optional[Dict[str, Any]]) -> Dict[str, JSONDiffEntry]:
    """Diff two JSON documents by top-level key, keeping only changed keys."""
    before = before or {}
    after = after or {}
    diff = {}
    for key in list(before) + [k for k in after if k not in before]:
        old, new = before.get(key), after.get(key)
        if old == new:
            continue
        old_members, new_members = _members(old), _members(new)
        diff[key] = JSONDiffEntry(
            before=old,
            after=new,
            added=[m for m in new_members if m not in old_members],
            removed=[m for m in old_members if m not in new_members],
        )
    return diff


def remove_at_symbols(text: str) -> str:
    return text.replace("@", "")


def _noun(section: str, count: int) -> str:
    singular, plural = NOUNS.get(section, (f"{section} entry", f"{section} entries"))
    return singular if count == 1 else plural


def _verb(count: int) -> str:
    return "is" if count == 1 else "are"


def added_message(section: str, entry: JSONDiffEntry) -> Optional[ReportMessage]:
    count = len(entry.added)
    if count == 0:
        return None
    names = remove_at_symbols(", ".join(entry.added))
    return ReportMessage(
        level=ReportLevel.MESSAGE,
        text=f"There {_verb(count)} {count} new {_noun(section, count)} added in this PR: {names}.",
    )


def removed_message(section: str, entry: JSONDiffEntry) -> Optional[ReportMessage]:
    count = len(entry.removed)
    if count == 0:
        return None
    names = remove_at_symbols(", ".join(entry.removed))
    return ReportMessage(
        level=ReportLevel.MESSAGE,
        text=f"There {_verb(count)} {count} removed {_noun(section, count)} in this PR: {names}.",
    )


def updated_message(section: str, entry: JSONDiffEntry) -> Optional[ReportMessage]:
    if not isinstance(entry.before, dict) or not isinstance(entry.after, dict):
        return None
    updated = []
    for name, version_after in entry.after.items():
        version_before = entry.before.get(name)
        if version_before and version_after != version_before:
            updated.append(f"{name} (from <b>{version_before}</b> to <b>{version_after}</b>)")
    count = len(updated)
    if count == 0:
        return None
    return ReportMessage(
        level=ReportLevel.MESSAGE,
        text=(
            f"The version of {count} {_noun(section, count)} have been updated "
            f"in this PR: {remove_at_symbols(', '.join(updated))}."
        ),
    )


async def check_section(section: str, diff: Optional[Dict[str, JSONDiffEntry]]) -> List[ReportMessage]:
    """Describe the added, removed and updated entries of one manifest section."""
    if not diff or section not in diff:
        return []
    entry = diff[section]
    messages = [
        added_message(section, entry),
        removed_message(section, entry),
        updated_message(section, entry),
    ]
    return [m for m in messages if m is not None]


def manifest_diff(before_text: Optional[str], after_text: Optional[str]) -> Optional[Dict[str, JSONDiffEntry]]:
    """Diff two manifest snapshots, or ``None`` when either is unusable."""
    before, after = parse_manifest(before_text), parse_manifest(after_text)
    if before is None or after is None:
        return None
    return json_diff(before, after)
