"""Engine settings, optionally read from ``MODAL_INPUT_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "MODAL_INPUT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_flag(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Behavioural switches for a ``ModeManager``.

    ``vim_mode`` enables modal editing as soon as the manager is built.
    ``clear_operator_on_completion`` drops the pending operator once it has
    been folded into a composite action; by default it stays pending until
    the next transition into Normal mode.
    """

    vim_mode: bool = False
    clear_operator_on_completion: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        return cls(
            vim_mode=_parse_flag("VIM_MODE", env.get(f"{ENV_PREFIX}VIM_MODE"), False),
            clear_operator_on_completion=_parse_flag(
                "CLEAR_OPERATOR",
                env.get(f"{ENV_PREFIX}CLEAR_OPERATOR"),
                False,
            ),
        )


__all__ = ["EngineSettings", "ENV_PREFIX"]
