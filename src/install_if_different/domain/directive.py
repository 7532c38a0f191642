from dataclasses import dataclass
from typing import Any, Union

from src.install_if_different.domain.errors import UnrecognizedDirectiveFormatError
from src.install_if_different.domain.pattern import Pattern


@dataclass(frozen=True)
class DigestCheck:
    expected_digest: str


@dataclass(frozen=True)
class PatternCheck:
    expected_version: str
    pattern: Pattern


Directive = Union[DigestCheck, PatternCheck]


def decode_directive(raw: Any) -> Directive:
    """Decode the wire value of ``install-if-different``.

    A bare string is a sha256sum, an object carries a ``version`` and a
    ``pattern``. Any other value, including ``None``, is rejected.
    """
    if isinstance(raw, str):
        return DigestCheck(expected_digest=raw)
    if isinstance(raw, dict):
        version = raw.get("version")
        if not isinstance(version, str):
            raise UnrecognizedDirectiveFormatError(raw)
        return PatternCheck(expected_version=version, pattern=Pattern.from_directive(raw.get("pattern")))
    raise UnrecognizedDirectiveFormatError(raw)
