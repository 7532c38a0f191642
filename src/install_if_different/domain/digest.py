import hashlib
from typing import TYPE_CHECKING

from src.config.logger_config import logger
from src.config.settings import READ_CHUNK_SIZE
from src.install_if_different.domain.entities import InstallDecision
from src.install_if_different.domain.errors import TargetUnreadableError

if TYPE_CHECKING:
    from src.install_if_different.application.ports import FileSystemPort


def compute_file_sha256(fs: "FileSystemPort", path: str, chunk_size: int = READ_CHUNK_SIZE) -> str:
    digest = hashlib.sha256()
    try:
        with fs.open_binary(path) as fp:
            for chunk in iter(lambda: fp.read(chunk_size), b""):
                digest.update(chunk)
    except OSError as exc:
        logger.error("Failed to compute sha256sum: target={}, error={}", path, exc)
        raise TargetUnreadableError(path, "check sha256sum", str(exc)) from exc
    return digest.hexdigest()


def compare_digest(fs: "FileSystemPort", target: str, expected_digest: str) -> InstallDecision:
    calculated = compute_file_sha256(fs, target)
    if calculated == expected_digest:
        logger.info("Sha256sums match. No need to install: target={}", target)
        return InstallDecision(proceed=False, reason="digest_match")

    logger.info("Sha256sums don't match. Installing: target={}, calculated={}, expected={}", target, calculated, expected_digest)
    return InstallDecision(proceed=True, reason="digest_mismatch")
