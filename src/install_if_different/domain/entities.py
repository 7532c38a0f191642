from dataclasses import dataclass, field
from typing import Any

# Reasons that say nothing about the target content.
INDETERMINATE_REASONS = frozenset({"pattern_invalid", "version_not_found"})


@dataclass(frozen=True)
class UpdateObject:
    mode: str
    install_if_different: Any = None
    filename: str | None = None
    sha256sum: str | None = None
    target: str | None = None
    target_type: str | None = None
    target_path: str | None = None
    compressed: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "UpdateObject":
        known = {
            "mode",
            "install-if-different",
            "filename",
            "sha256sum",
            "target",
            "target-type",
            "target-path",
            "compressed",
        }
        return cls(
            mode=str(raw.get("mode", "")),
            install_if_different=raw.get("install-if-different"),
            filename=raw.get("filename"),
            sha256sum=raw.get("sha256sum"),
            target=raw.get("target"),
            target_type=raw.get("target-type"),
            target_path=raw.get("target-path"),
            compressed=bool(raw.get("compressed", False)),
            extra={k: v for k, v in raw.items() if k not in known},
        )


@dataclass(frozen=True)
class UpdatePackage:
    product_uid: str | None
    version: str | None
    supported_hardware: Any
    objects: tuple[tuple[UpdateObject, ...], ...]

    def installation_set(self, index: int) -> tuple[UpdateObject, ...]:
        return self.objects[index]


@dataclass(frozen=True)
class InstallDecision:
    proceed: bool
    reason: str

    @property
    def indeterminate(self) -> bool:
        return self.reason in INDETERMINATE_REASONS
