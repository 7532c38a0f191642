"""Domain model and decision rules for install-if-different."""

from src.install_if_different.domain.checker import InstallIfDifferentChecker, evaluate
from src.install_if_different.domain.directive import DigestCheck, PatternCheck, decode_directive
from src.install_if_different.domain.entities import InstallDecision, UpdateObject, UpdatePackage
from src.install_if_different.domain.errors import (
    InstallIfDifferentError,
    MetadataError,
    TargetUnreadableError,
    UnknownModeError,
    UnrecognizedDirectiveFormatError,
)
from src.install_if_different.domain.pattern import Pattern, PatternType

__all__ = [
    "decode_directive",
    "DigestCheck",
    "evaluate",
    "InstallDecision",
    "InstallIfDifferentChecker",
    "InstallIfDifferentError",
    "MetadataError",
    "Pattern",
    "PatternCheck",
    "PatternType",
    "TargetUnreadableError",
    "UnknownModeError",
    "UnrecognizedDirectiveFormatError",
    "UpdateObject",
    "UpdatePackage",
]
