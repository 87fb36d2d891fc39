"""
Environment loading for the ZarinPal client configuration.

Understands ``.env`` files (comments, ``export`` prefixes and quoted values),
layers explicit overrides on top and hands back a plain mapping that
:class:`zarinpal_payments.core.config.Config` can read.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

__all__ = [
    "ENV_PREFIX",
    "build_environment",
]

ENV_PREFIX = "ZARINPAL_"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _read_env_file(path: Path) -> Dict[str, str]:
    if not path.is_file():
        return {}

    values: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            values[key] = _unquote(value.strip())
    return values


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge the configuration sources, lowest precedence first.

    Only ``ZARINPAL_*`` keys from ``base`` (default :data:`os.environ`) and
    the ``.env`` file are kept. The process environment wins over the file;
    ``overrides`` win over both. Pass ``env_file=None`` to skip the file.
    """
    source = os.environ if base is None else base
    merged: Dict[str, str] = {
        key: value for key, value in source.items() if key.startswith(ENV_PREFIX)
    }

    if env_file is not None:
        for key, value in _read_env_file(Path(env_file)).items():
            if key.startswith(ENV_PREFIX):
                merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return merged
