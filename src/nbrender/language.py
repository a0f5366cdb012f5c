from __future__ import annotations

from typing import Any, Mapping

DEFAULT_LANGUAGE = "text"


def resolve_language(metadata: Mapping[str, Any]) -> str:
    """Return the language tag used to pick a syntax highlighter.

    Fallback chain: language_info.codemirror_mode.name,
    language_info.codemirror_mode (when it is a plain tag),
    language_info.name, then "text".
    """
    info = metadata.get("language_info") if isinstance(metadata, Mapping) else None
    if not isinstance(info, Mapping):
        return DEFAULT_LANGUAGE

    mode = info.get("codemirror_mode")
    candidates = []
    if isinstance(mode, Mapping):
        candidates.append(mode.get("name"))
    else:
        candidates.append(mode)
    candidates.append(info.get("name"))

    for c in candidates:
        if isinstance(c, str) and c.strip():
            return c
    return DEFAULT_LANGUAGE
