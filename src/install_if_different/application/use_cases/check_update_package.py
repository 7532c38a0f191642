from dataclasses import dataclass

from src.config.logger_config import logger
from src.install_if_different.application.contracts import ObjectDecisionRecord
from src.install_if_different.application.workflows.decision_pipeline import (
    InstallDecisionPipeline,
    PipelineConfig,
    PipelineSummary,
)


@dataclass(frozen=True)
class CheckUpdatePackageCommand:
    metadata_path: str
    installation_set: int = 0
    show_progress: bool = True


@dataclass(frozen=True)
class CheckUpdatePackageResult:
    total_objects: int
    install_count: int
    skip_count: int
    indeterminate_count: int
    error_count: int
    objects: tuple[ObjectDecisionRecord, ...]

    @property
    def objects_to_install(self) -> tuple[str | None, ...]:
        return tuple(row.filename for row in self.objects if row.error is None and row.proceed)


class CheckUpdatePackageUseCase:
    def __init__(self, pipeline: InstallDecisionPipeline) -> None:
        self.pipeline = pipeline

    def execute(self, command: CheckUpdatePackageCommand) -> CheckUpdatePackageResult:
        logger.info(
            "Install-if-different check started: metadata_path={}, installation_set={}",
            command.metadata_path,
            command.installation_set,
        )
        summary: PipelineSummary = self.pipeline.run(
            PipelineConfig(
                installation_set=command.installation_set,
                show_progress=command.show_progress,
            )
        )
        logger.info(
            "Install-if-different check completed: total_objects={}, install_count={}, skip_count={}, error_count={}",
            summary.total_objects,
            summary.install_count,
            summary.skip_count,
            summary.error_count,
        )
        return CheckUpdatePackageResult(
            total_objects=summary.total_objects,
            install_count=summary.install_count,
            skip_count=summary.skip_count,
            indeterminate_count=summary.indeterminate_count,
            error_count=summary.error_count,
            objects=summary.objects,
        )
