"""
Configuration objects and helpers for the ZarinPal client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ZarinPalError

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_USER_AGENT",
    "load_config",
]

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_USER_AGENT = "ZarinPalSdk/v1.0.1 (python)"

_PARAMETER_TO_ENV_KEY = {
    "merchant_id": "ZARINPAL_MERCHANT_ID",
    "sandbox": "ZARINPAL_SANDBOX",
    "access_token": "ZARINPAL_ACCESS_TOKEN",
    "timeout_seconds": "ZARINPAL_TIMEOUT_SECONDS",
    "user_agent": "ZARINPAL_USER_AGENT",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ZarinPalError):
    """Raised when the supplied configuration is invalid."""


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(raw: str, field_name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be a boolean flag, got '{raw}'")


def _parse_timeout(raw: str) -> int:
    try:
        timeout = int(raw)
    except ValueError as exc:
        raise ConfigError(
            f"ZARINPAL_TIMEOUT_SECONDS must be an integer, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("ZARINPAL_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class Config:
    """
    Merchant settings shared by every request a client sends.

    ``merchant_id`` and ``sandbox`` fill in requests that leave them unset.
    ``access_token`` is only needed for the GraphQL operations (refunds and
    transaction listing).
    """

    merchant_id: str
    sandbox: bool = False
    access_token: Optional[str] = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT

    def __repr__(self) -> str:
        token = "***" if self.access_token else None
        return (
            f"Config(merchant_id={self.merchant_id!r}, sandbox={self.sandbox}, "
            f"access_token={token!r}, timeout_seconds={self.timeout_seconds})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "Config":
        merchant_id = (values.get("ZARINPAL_MERCHANT_ID") or "").strip()
        if not merchant_id:
            raise ConfigError("ZARINPAL_MERCHANT_ID must be provided")

        sandbox = _parse_bool(values.get("ZARINPAL_SANDBOX", "false"), "ZARINPAL_SANDBOX")

        access_token = (values.get("ZARINPAL_ACCESS_TOKEN") or "").strip() or None

        timeout_seconds = _parse_timeout(
            values.get("ZARINPAL_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        )
        user_agent = values.get("ZARINPAL_USER_AGENT") or DEFAULT_USER_AGENT

        return cls(
            merchant_id=merchant_id,
            sandbox=sandbox,
            access_token=access_token,
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
        )


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = _stringify(value)
    return overrides


def load_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    merchant_id: Optional[str] = None,
    sandbox: Optional[bool] = None,
    access_token: Optional[str] = None,
    timeout_seconds: Optional[int] = None,
    user_agent: Optional[str] = None,
) -> Config:
    """
    Resolve a :class:`Config` from the environment.

    Values can come from ``os.environ`` (or ``base``), a ``.env`` file,
    ``overrides`` keyed by ``ZARINPAL_*`` names, or the keyword arguments.
    Keyword arguments win over ``overrides``, which win over the file and
    the base mapping.
    """
    merged_overrides = dict(overrides or {})
    merged_overrides.update(
        _collect_parameter_overrides(
            {
                "merchant_id": merchant_id,
                "sandbox": sandbox,
                "access_token": access_token,
                "timeout_seconds": timeout_seconds,
                "user_agent": user_agent,
            }
        )
    )

    variables = build_environment(
        env_file=env_file,
        base=base,
        overrides=merged_overrides,
    )
    return Config.from_mapping(variables)
