from src.config.logger_config import logger
from src.install_if_different.application.use_cases.check_update_package import (
    CheckUpdatePackageCommand,
    CheckUpdatePackageResult,
    CheckUpdatePackageUseCase,
)
from src.install_if_different.application.workflows.decision_pipeline import InstallDecisionPipeline
from src.install_if_different.domain.checker import InstallIfDifferentChecker
from src.install_if_different.infrastructure.filesystem.local_fs import LocalFileSystem
from src.install_if_different.infrastructure.sinks.report_sink import JsonReportSink
from src.install_if_different.infrastructure.sources.json_metadata_source import JsonMetadataSource


def run_check(
    metadata_path: str = "artifacts/update/metadata.json",
    installation_set: int = 0,
    fs_root: str | None = None,
    output_report_path: str | None = "artifacts/update/install_decisions.json",
    show_progress: bool = True,
) -> CheckUpdatePackageResult:
    source = JsonMetadataSource(metadata_path=metadata_path)
    checker = InstallIfDifferentChecker(fs=LocalFileSystem(root=fs_root))
    report_sink = JsonReportSink(report_path=output_report_path) if output_report_path else None
    if report_sink is None:
        logger.info("Install decision report disabled")

    pipeline = InstallDecisionPipeline(source=source, checker=checker, report_sink=report_sink)
    use_case = CheckUpdatePackageUseCase(pipeline=pipeline)
    return use_case.execute(
        CheckUpdatePackageCommand(
            metadata_path=metadata_path,
            installation_set=installation_set,
            show_progress=show_progress,
        )
    )
