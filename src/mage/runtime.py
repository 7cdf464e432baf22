from __future__ import annotations

from contextvars import ContextVar, Token
import os

_VERBOSE_LOGGING: ContextVar[bool] = ContextVar("mage_verbose_logging", default=False)
_JOBS: ContextVar[int | None] = ContextVar("mage_jobs", default=None)
_HOME_DIR: ContextVar[str | None] = ContextVar("mage_home_dir", default=None)

_DEFAULT_JOBS = 8
_MAX_JOBS = 64


class HomeDirectoryError(RuntimeError):
    pass


def _read_positive_int_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value <= 0:
        return default
    return min(value, _MAX_JOBS)


def _read_bool_env(name: str) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def get_verbose_logging() -> bool:
    return _VERBOSE_LOGGING.get() or _read_bool_env("MAGE_VERBOSE")


def set_verbose_logging(enabled: bool) -> Token[bool]:
    return _VERBOSE_LOGGING.set(bool(enabled))


def reset_verbose_logging(token: Token[bool]) -> None:
    _VERBOSE_LOGGING.reset(token)


def get_jobs() -> int:
    jobs = _JOBS.get()
    if jobs is not None:
        return jobs
    return _read_positive_int_env("MAGE_JOBS", _DEFAULT_JOBS)


def set_jobs(jobs: int | None) -> Token[int | None]:
    if jobs is not None:
        jobs = max(1, min(int(jobs), _MAX_JOBS))
    return _JOBS.set(jobs)


def reset_jobs(token: Token[int | None]) -> None:
    _JOBS.reset(token)


def get_home_dir() -> str:
    """
    Return the home directory used for ``~`` expansion.

    An explicit override wins over ``$HOME``. Having neither is a fatal
    configuration error.
    """
    home = _HOME_DIR.get()
    if home:
        return home
    home = os.environ.get("HOME")
    if not home:
        raise HomeDirectoryError("HOME is not set; cannot expand '~'")
    return home


def set_home_dir(home: str | os.PathLike[str] | None) -> Token[str | None]:
    return _HOME_DIR.set(os.fspath(home) if home is not None else None)


def reset_home_dir(token: Token[str | None]) -> None:
    _HOME_DIR.reset(token)
