"""Version extraction from the content currently installed on a target.

A pattern is either one of the predefined extractors (``linux-kernel``,
``u-boot``) or a user supplied regular expression with exactly one capture
group, optionally bounded by ``seek`` and ``buffer-size``.
"""

import re
import struct
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from src.config.logger_config import logger
from src.install_if_different.domain.entities import InstallDecision
from src.install_if_different.domain.errors import TargetUnreadableError

if TYPE_CHECKING:
    from src.install_if_different.application.ports import FileSystemPort


class PatternType(str, Enum):
    REGEXP = "regexp"
    LINUX_KERNEL = "linux-kernel"
    U_BOOT = "u-boot"


U_BOOT_VERSION_RE = re.compile(rb"U-Boot(?: SPL)? (\S+) \(\w{3} \d{2} \d{4} - \d{2}:\d{2}:\d{2}")
LINUX_VERSION_RE = re.compile(rb"Linux version (\S+)")
UIMAGE_NAME_VERSION_RE = re.compile(rb"Linux-(\S+)")

UIMAGE_MAGIC = 0x27051956
UIMAGE_NAME_OFFSET = 32
UIMAGE_NAME_SIZE = 32

BZIMAGE_MAGIC = b"HdrS"
BZIMAGE_MAGIC_OFFSET = 0x202
BZIMAGE_VERSION_POINTER_OFFSET = 0x20E
BZIMAGE_VERSION_BASE = 0x200


@dataclass(frozen=True)
class Pattern:
    pattern_type: PatternType | None
    regexp: Any = None
    seek: Any = 0
    buffer_size: Any = 0

    @classmethod
    def from_directive(cls, raw: Any) -> "Pattern":
        """Build a pattern from the ``pattern`` field of the directive.

        Unknown names and malformed objects produce a pattern whose
        ``is_valid()`` is false instead of an error.
        """
        if isinstance(raw, str):
            try:
                pattern_type = PatternType(raw)
            except ValueError:
                return cls(pattern_type=None)
            if pattern_type is PatternType.REGEXP:
                return cls(pattern_type=None)
            return cls(pattern_type=pattern_type)
        if isinstance(raw, dict):
            return cls(
                pattern_type=PatternType.REGEXP,
                regexp=raw.get("regexp"),
                seek=raw.get("seek", 0),
                buffer_size=raw.get("buffer-size", 0),
            )
        return cls(pattern_type=None)

    def is_valid(self) -> bool:
        if self.pattern_type in (PatternType.LINUX_KERNEL, PatternType.U_BOOT):
            return True
        if self.pattern_type is not PatternType.REGEXP:
            return False
        if not _is_offset(self.seek) or not _is_offset(self.buffer_size):
            return False
        compiled = self._compile()
        return compiled is not None and compiled.groups == 1

    def capture(self, fs: "FileSystemPort", target: str) -> str:
        """Return the first captured version in ``target`` or ``""`` when nothing matches."""
        if self.pattern_type is PatternType.LINUX_KERNEL:
            return _capture_linux_kernel(_read_region(fs, target, 0, 0))
        if self.pattern_type is PatternType.U_BOOT:
            return _first_group(U_BOOT_VERSION_RE, _read_region(fs, target, 0, 0))

        compiled = self._compile()
        if compiled is None or not self.is_valid():
            raise ValueError("capture requires a valid pattern")
        data = _read_region(fs, target, self.seek, self.buffer_size)
        return _first_group(compiled, data)

    def _compile(self) -> re.Pattern[bytes] | None:
        if not isinstance(self.regexp, str):
            return None
        try:
            return re.compile(self.regexp.encode("utf-8"))
        except (re.error, UnicodeEncodeError, OverflowError, RecursionError):
            return None


def compare_pattern(fs: "FileSystemPort", target: str, pattern: Pattern, expected_version: str) -> InstallDecision:
    if not pattern.is_valid():
        logger.warning("Install-if-different pattern is not usable, skipping install: target={}", target)
        return InstallDecision(proceed=False, reason="pattern_invalid")

    captured = pattern.capture(fs, target)
    if captured == "":
        logger.warning("No version captured from target, skipping install: target={}", target)
        return InstallDecision(proceed=False, reason="version_not_found")

    if captured != expected_version:
        logger.info("Version mismatch. Installing: captured={}, expected={}", captured, expected_version)
        return InstallDecision(proceed=True, reason="version_mismatch")

    logger.info("Version match. No need to install: version={}", captured)
    return InstallDecision(proceed=False, reason="version_match")


def _is_offset(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _read_region(fs: "FileSystemPort", target: str, seek: int, buffer_size: int) -> bytes:
    try:
        with fs.open_binary(target) as fp:
            fp.seek(seek)
            if buffer_size > 0:
                return fp.read(buffer_size)
            return fp.read()
    except OSError as exc:
        logger.error("Failed to read target for version capture: target={}, error={}", target, exc)
        raise TargetUnreadableError(target, "capture version", str(exc)) from exc


def _first_group(regex: re.Pattern[bytes], data: bytes) -> str:
    match = regex.search(data)
    if match is None or match.group(1) is None:
        return ""
    return match.group(1).decode("utf-8", errors="replace")


def _capture_linux_kernel(data: bytes) -> str:
    return _uimage_version(data) or _bzimage_version(data) or _first_group(LINUX_VERSION_RE, data)


def _uimage_version(data: bytes) -> str:
    if len(data) < UIMAGE_NAME_OFFSET + UIMAGE_NAME_SIZE:
        return ""
    (magic,) = struct.unpack_from(">I", data, 0)
    if magic != UIMAGE_MAGIC:
        return ""
    name = data[UIMAGE_NAME_OFFSET : UIMAGE_NAME_OFFSET + UIMAGE_NAME_SIZE].split(b"\0", 1)[0]
    return _first_group(UIMAGE_NAME_VERSION_RE, name)


def _bzimage_version(data: bytes) -> str:
    if len(data) < BZIMAGE_VERSION_POINTER_OFFSET + 2:
        return ""
    if data[BZIMAGE_MAGIC_OFFSET : BZIMAGE_MAGIC_OFFSET + len(BZIMAGE_MAGIC)] != BZIMAGE_MAGIC:
        return ""
    (pointer,) = struct.unpack_from("<H", data, BZIMAGE_VERSION_POINTER_OFFSET)
    start = pointer + BZIMAGE_VERSION_BASE
    if pointer == 0 or start >= len(data):
        return ""
    raw = data[start:].split(b"\0", 1)[0]
    token = raw.split(b" ", 1)[0]
    return token.decode("utf-8", errors="replace")
