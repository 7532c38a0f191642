from typing import TYPE_CHECKING

from src.config.logger_config import logger
from src.install_if_different.domain.digest import compare_digest
from src.install_if_different.domain.directive import DigestCheck, decode_directive
from src.install_if_different.domain.entities import InstallDecision, UpdateObject
from src.install_if_different.domain.errors import (
    TargetUnreadableError,
    UnknownModeError,
    UnrecognizedDirectiveFormatError,
)
from src.install_if_different.domain.install_modes import get_mode_handler, supports_target_getter
from src.install_if_different.domain.pattern import compare_pattern

if TYPE_CHECKING:
    from src.install_if_different.application.ports import FileSystemPort


class InstallIfDifferentChecker:
    """Decides whether an object has to be installed on its target.

    Raises ``UnknownModeError``, ``UnrecognizedDirectiveFormatError`` or
    ``TargetUnreadableError``; every other outcome is an ``InstallDecision``.
    """

    def __init__(self, fs: "FileSystemPort") -> None:
        self.fs = fs

    def proceed(self, obj: UpdateObject) -> InstallDecision:
        logger.info("Checking install-if-different support: mode={}, filename={}", obj.mode, obj.filename)

        try:
            handler_cls = get_mode_handler(obj.mode)
        except UnknownModeError as exc:
            final = UnknownModeError(obj.mode, filename=obj.filename)
            logger.error("{}", final)
            raise final from exc

        handler = handler_cls(obj)
        if not supports_target_getter(handler):
            logger.info("'{}' mode doesn't support install-if-different", obj.mode)
            return InstallDecision(proceed=True, reason="mode_without_target_support")

        logger.info("'{}' mode supports install-if-different", obj.mode)
        target = handler.get_target()

        try:
            directive = decode_directive(obj.install_if_different)
        except UnrecognizedDirectiveFormatError as exc:
            final = exc.with_object(obj.mode, obj.filename)
            logger.error("{}", final)
            raise final from exc

        try:
            if isinstance(directive, DigestCheck):
                logger.info("Checking sha256sum: target={}", target)
                return compare_digest(self.fs, target, directive.expected_digest)
            logger.info("Checking pattern: target={}, pattern_type={}", target, directive.pattern.pattern_type)
            return compare_pattern(self.fs, target, directive.pattern, directive.expected_version)
        except TargetUnreadableError as exc:
            raise exc.with_object(obj.mode, obj.filename) from exc


def evaluate(obj: UpdateObject, fs: "FileSystemPort") -> InstallDecision:
    return InstallIfDifferentChecker(fs).proceed(obj)
