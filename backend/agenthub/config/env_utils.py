"""
Environment helpers for config dataclasses.
"""

from __future__ import annotations

import os
from dataclasses import MISSING, Field
from logging import getLogger
from typing import Any, Dict, Mapping, Optional

logger = getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


def _coerce(raw: str, type_hint: Any) -> Any:
    # ``from __future__ import annotations`` leaves field types as strings
    hint = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
    if hint == "bool":
        return raw.strip().lower() in _TRUE_VALUES
    if hint == "int":
        return int(raw)
    if hint == "float":
        return float(raw)
    return raw


def read_env_defaults(
    env_map: Mapping[str, str],
    fields: Mapping[str, Field],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Build constructor kwargs for a config dataclass.

    Each field listed in ``env_map`` takes the value of its environment
    variable when set; otherwise the dataclass default applies. Values
    that fail to convert are logged and skipped.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for name, var in env_map.items():
        field = fields.get(name)
        if field is None:
            continue
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        try:
            values[name] = _coerce(raw, field.type)
        except ValueError:
            default = field.default if field.default is not MISSING else None
            logger.warning(f"Ignoring invalid value for {var}: {raw!r} (using {default!r})")
    return values
