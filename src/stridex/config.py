from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from threading import RLock

_DEFAULT_MAX_NDIM = 32
_DEFAULT_INTP_BITS = 64


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Process-wide limits applied by dimension parsing and resize."""

    max_ndim: int = _DEFAULT_MAX_NDIM
    intp_bits: int = _DEFAULT_INTP_BITS

    def __post_init__(self) -> None:
        if isinstance(self.max_ndim, bool) or not isinstance(self.max_ndim, int):
            raise TypeError("max_ndim must be an int")
        if self.max_ndim < 1:
            raise ValueError("max_ndim must be positive")
        if self.intp_bits not in (32, 64):
            raise ValueError("intp_bits must be 32 or 64")

    @property
    def max_intp(self) -> int:
        """Largest value of the signed index type."""
        return (1 << (self.intp_bits - 1)) - 1


_lock = RLock()
_current = LayoutConfig()


def get_layout_config() -> LayoutConfig:
    """Return the active layout configuration."""
    with _lock:
        return _current


def set_layout_config(config: LayoutConfig, /) -> LayoutConfig:
    """Install one layout configuration and return the previous one."""
    global _current
    if not isinstance(config, LayoutConfig):
        raise TypeError("layout config must be a LayoutConfig")
    with _lock:
        previous = _current
        _current = config
    return previous


@contextmanager
def layout_config(**overrides: int) -> Iterator[LayoutConfig]:
    """Temporarily override fields of the active layout configuration."""
    config = replace(get_layout_config(), **overrides)
    previous = set_layout_config(config)
    try:
        yield config
    finally:
        set_layout_config(previous)


__all__ = [
    "LayoutConfig",
    "get_layout_config",
    "layout_config",
    "set_layout_config",
]
