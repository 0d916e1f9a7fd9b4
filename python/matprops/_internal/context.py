from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass, field
from typing import Mapping

from .warnings import MatPropsConfigWarning

logger = logging.getLogger(__name__)

_ENV_PREFIX = "MATPROPS_"
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_TRUE_TOKENS = ("1", "true", "yes", "on")
_FALSE_TOKENS = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class UserConfig:
    """User-level runtime settings carried by an ExecutionContext.

    The package reads `debug` and `log_level` (see configure_logging).
    `num_threads` is parsed and validated here but only carried through for
    kernels that parallelize; the property transfer kernel ignores it.
    """

    debug: bool = False
    log_level: str = "WARNING"
    num_threads: int = 1

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, stacklevel: int = 2) -> "UserConfig":
        """Build a config from MATPROPS_* variables.

        Malformed values fall back to the defaults with a MatPropsConfigWarning.
        `stacklevel` has the meaning it has for warnings.warn, counted from
        this method, so wrappers can attribute the warning to their caller.
        """

        env = os.environ if environ is None else environ
        defaults = cls()

        debug = defaults.debug
        raw = env.get(_ENV_PREFIX + "DEBUG")
        if raw is not None:
            token = raw.strip().lower()
            if token in _TRUE_TOKENS:
                debug = True
            elif token in _FALSE_TOKENS:
                debug = False
            else:
                _warn_fallback("DEBUG", raw, defaults.debug, stacklevel)

        log_level = defaults.log_level
        raw = env.get(_ENV_PREFIX + "LOG_LEVEL")
        if raw is not None:
            token = raw.strip().upper()
            if token in _LOG_LEVELS:
                log_level = token
            else:
                _warn_fallback("LOG_LEVEL", raw, defaults.log_level, stacklevel)

        num_threads = defaults.num_threads
        raw = env.get(_ENV_PREFIX + "NUM_THREADS")
        if raw is not None:
            try:
                num_threads = int(raw)
                if num_threads < 1:
                    raise ValueError(raw)
            except ValueError:
                num_threads = defaults.num_threads
                _warn_fallback("NUM_THREADS", raw, defaults.num_threads, stacklevel)

        return cls(debug=debug, log_level=log_level, num_threads=num_threads)


def _warn_fallback(name: str, raw: str, default: object, stacklevel: int) -> None:
    warnings.warn(
        f"Ignoring {_ENV_PREFIX}{name}={raw!r}; using default {default!r}",
        MatPropsConfigWarning,
        stacklevel=stacklevel + 1,
    )


@dataclass
class ExecutionContext:
    """Process-wide runtime configuration handed to every kernel call.

    Kernels receive it unchanged; the property transfer kernel never reads it.
    """

    config: UserConfig = field(default_factory=UserConfig)

    def __post_init__(self) -> None:
        logger.debug("created execution context: %r", self.config)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExecutionContext":
        return cls(config=UserConfig.from_env(environ, stacklevel=3))

    def configure_logging(self) -> None:
        level = logging.DEBUG if self.config.debug else getattr(logging, self.config.log_level)
        logging.getLogger("matprops").setLevel(level)
