"""
Language preference
===================

The only state kept between sessions: which language the user picked.
Stored as a small JSON file; anything unreadable falls back to the default.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from .i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

PREFS_ENV = "LAYOFFDASH_PREFS"


def default_prefs_path() -> Path:
    env = os.environ.get(PREFS_ENV)
    if env:
        return Path(env)
    return Path.home() / ".layoffdash" / "preferences.json"


def load_language(path: Optional[Union[str, Path]] = None) -> str:
    path = Path(path) if path else default_prefs_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            lang = json.load(f).get("language")
    except FileNotFoundError:
        return DEFAULT_LANGUAGE
    except (OSError, ValueError, AttributeError) as e:
        logger.warning("Ignoring unreadable preferences file %s: %s", path, e)
        return DEFAULT_LANGUAGE
    if lang in SUPPORTED_LANGUAGES:
        return lang
    return DEFAULT_LANGUAGE


def save_language(lang: str, path: Optional[Union[str, Path]] = None) -> Path:
    if lang not in SUPPORTED_LANGUAGES:
        raise ValueError(f"language must be one of: {', '.join(SUPPORTED_LANGUAGES)}")
    path = Path(path) if path else default_prefs_path()
    os.makedirs(path.parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"language": lang}, f)
    return path
