# diffy/utils/prefs.py
"""Small JSON preference store in the per-user config dir."""

import json
from pathlib import Path
from platformdirs import user_config_dir

from diffy.config import APP_NAME, APP_AUTHOR, FLAG_PREF_KEYS
from diffy.utils.logger import get_logger

logger = get_logger("prefs")


def _prefs_path() -> Path:
    cfg_dir = Path(user_config_dir(appname=APP_NAME, appauthor=APP_AUTHOR))
    cfg_dir.mkdir(parents=True, exist_ok=True)
    return cfg_dir / "prefs.json"


def load_prefs() -> dict:
    p = _prefs_path()
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"Ignoring unreadable prefs {p}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def save_prefs(data: dict) -> None:
    p = _prefs_path()
    try:
        p.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to save prefs {p}: {e}")


def update_prefs(**values) -> None:
    """Merge ``values`` into the stored prefs."""
    prefs = load_prefs()
    prefs.update(values)
    save_prefs(prefs)


def load_flag_prefs() -> dict:
    """Return the persisted ignore toggles, defaulting each to False."""
    prefs = load_prefs()
    return {k: bool(prefs.get(k, False)) for k in FLAG_PREF_KEYS}


def save_flag_prefs(**flags: bool) -> None:
    update_prefs(**{k: bool(v) for k, v in flags.items() if k in FLAG_PREF_KEYS})
