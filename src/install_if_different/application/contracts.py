from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ObjectDecisionRecord:
    index: int
    filename: str | None
    mode: str
    proceed: bool
    reason: str | None
    indeterminate: bool
    error_type: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "filename": self.filename,
            "mode": self.mode,
            "proceed": self.proceed,
            "reason": self.reason,
            "indeterminate": self.indeterminate,
            "error_type": self.error_type,
            "error": self.error,
        }


@dataclass(frozen=True)
class DecisionReportRecord:
    product_uid: str | None
    package_version: str | None
    installation_set: int
    total_objects: int
    install_count: int
    skip_count: int
    indeterminate_count: int
    error_count: int
    objects: tuple[ObjectDecisionRecord, ...]
    duration_ms: int
    generated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_uid": self.product_uid,
            "package_version": self.package_version,
            "installation_set": self.installation_set,
            "total_objects": self.total_objects,
            "install_count": self.install_count,
            "skip_count": self.skip_count,
            "indeterminate_count": self.indeterminate_count,
            "error_count": self.error_count,
            "objects": [row.to_dict() for row in self.objects],
            "duration_ms": self.duration_ms,
            "generated_at": self.generated_at,
        }
