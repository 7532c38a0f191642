import json
from pathlib import Path
from typing import Any

from src.config.logger_config import logger
from src.install_if_different.application.ports import MetadataSourcePort
from src.install_if_different.domain.entities import UpdateObject, UpdatePackage
from src.install_if_different.domain.errors import MetadataError


class JsonMetadataSource(MetadataSourcePort):
    def __init__(self, metadata_path: str) -> None:
        self.metadata_path = Path(metadata_path)

    def load(self) -> UpdatePackage:
        try:
            raw = self.metadata_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MetadataError(f"failed to read metadata {self.metadata_path}: {exc}") from exc
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MetadataError(f"failed to parse metadata {self.metadata_path}: {exc.msg}") from exc

        package = self.parse(parsed)
        logger.info(
            "Metadata loaded: metadata_path={}, product_uid={}, installation_sets={}",
            str(self.metadata_path),
            package.product_uid,
            len(package.objects),
        )
        return package

    @staticmethod
    def parse(parsed: Any) -> UpdatePackage:
        if not isinstance(parsed, dict):
            raise MetadataError("metadata root must be an object")
        raw_sets = parsed.get("objects", [])
        if not isinstance(raw_sets, list):
            raise MetadataError("metadata 'objects' must be a list of installation sets")

        sets: list[tuple[UpdateObject, ...]] = []
        for set_index, raw_set in enumerate(raw_sets):
            if not isinstance(raw_set, list):
                raise MetadataError(f"installation set {set_index} must be a list")
            objects = []
            for obj_index, raw_obj in enumerate(raw_set):
                if not isinstance(raw_obj, dict) or "mode" not in raw_obj:
                    raise MetadataError(f"object {obj_index} of installation set {set_index} has no mode")
                objects.append(UpdateObject.from_dict(raw_obj))
            sets.append(tuple(objects))

        return UpdatePackage(
            product_uid=parsed.get("product-uid"),
            version=parsed.get("version"),
            supported_hardware=parsed.get("supported-hardware"),
            objects=tuple(sets),
        )
