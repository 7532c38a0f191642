"""Install mode handlers and the registry resolving a mode name to its handler.

Only handlers that know which resource they overwrite implement
``TargetGetter``; the others always reinstall.
"""

from typing import Callable, ClassVar, Protocol, runtime_checkable

from src.install_if_different.domain.entities import UpdateObject
from src.install_if_different.domain.errors import UnknownModeError


@runtime_checkable
class TargetGetter(Protocol):
    def get_target(self) -> str: ...
    """Path of the resource currently installed by this mode."""


class ModeHandler:
    mode: ClassVar[str] = ""

    def __init__(self, obj: UpdateObject) -> None:
        self.obj = obj


_MODES: dict[str, type[ModeHandler]] = {}


def register_mode(name: str) -> Callable[[type[ModeHandler]], type[ModeHandler]]:
    def decorator(cls: type[ModeHandler]) -> type[ModeHandler]:
        if name in _MODES:
            raise ValueError(f"Install mode already registered: {name}")
        cls.mode = name
        _MODES[name] = cls
        return cls

    return decorator


def get_mode_handler(mode: str) -> type[ModeHandler]:
    try:
        return _MODES[mode]
    except KeyError:
        raise UnknownModeError(mode) from None


def registered_modes() -> tuple[str, ...]:
    return tuple(sorted(_MODES))


def supports_target_getter(handler: ModeHandler) -> bool:
    return isinstance(handler, TargetGetter)


@register_mode("raw")
class RawMode(ModeHandler):
    def get_target(self) -> str:
        return self.obj.target or ""


@register_mode("flash")
class FlashMode(ModeHandler):
    def get_target(self) -> str:
        return self.obj.target or ""


@register_mode("copy")
class CopyMode(ModeHandler):
    pass


@register_mode("tarball")
class TarballMode(ModeHandler):
    pass


@register_mode("ubifs")
class UbifsMode(ModeHandler):
    pass


@register_mode("imxkobs")
class ImxKobsMode(ModeHandler):
    pass


@register_mode("test")
class NullMode(ModeHandler):
    pass
