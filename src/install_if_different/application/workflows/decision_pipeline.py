from dataclasses import dataclass
from datetime import datetime, timezone
from time import perf_counter

from tqdm import tqdm

from src.config.logger_config import logger
from src.install_if_different.application.contracts import DecisionReportRecord, ObjectDecisionRecord
from src.install_if_different.application.ports import DecisionReportSinkPort, MetadataSourcePort
from src.install_if_different.domain.checker import InstallIfDifferentChecker
from src.install_if_different.domain.entities import UpdateObject
from src.install_if_different.domain.errors import InstallIfDifferentError


@dataclass(frozen=True)
class PipelineConfig:
    installation_set: int = 0
    show_progress: bool = True


@dataclass(frozen=True)
class PipelineSummary:
    total_objects: int
    install_count: int
    skip_count: int
    indeterminate_count: int
    error_count: int
    objects: tuple[ObjectDecisionRecord, ...]
    duration_ms: int
    generated_at: str


class InstallDecisionPipeline:
    def __init__(
        self,
        source: MetadataSourcePort,
        checker: InstallIfDifferentChecker,
        report_sink: DecisionReportSinkPort | None = None,
    ) -> None:
        self.source = source
        self.checker = checker
        self.report_sink = report_sink

    def run(self, config: PipelineConfig) -> PipelineSummary:
        started = perf_counter()
        package = self.source.load()
        if config.installation_set < 0 or config.installation_set >= len(package.objects):
            raise ValueError(
                f"Installation set {config.installation_set} out of range: package has {len(package.objects)} sets"
            )
        objects = package.installation_set(config.installation_set)

        logger.info(
            "Install decision pipeline started: product_uid={}, package_version={}, installation_set={}, objects={}",
            package.product_uid,
            package.version,
            config.installation_set,
            len(objects),
        )

        rows: list[ObjectDecisionRecord] = []
        for index, obj in enumerate(
            tqdm(
                objects,
                total=len(objects),
                desc="Install-if-different",
                unit="object",
                leave=True,
                disable=not config.show_progress,
            )
        ):
            rows.append(self._decide(index, obj))

        install_count = sum(1 for row in rows if row.error is None and row.proceed)
        skip_count = sum(1 for row in rows if row.error is None and not row.proceed)
        indeterminate_count = sum(1 for row in rows if row.indeterminate)
        error_count = sum(1 for row in rows if row.error is not None)

        summary = PipelineSummary(
            total_objects=len(rows),
            install_count=install_count,
            skip_count=skip_count,
            indeterminate_count=indeterminate_count,
            error_count=error_count,
            objects=tuple(rows),
            duration_ms=int((perf_counter() - started) * 1000),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        if self.report_sink is not None:
            self.report_sink.write_report(
                DecisionReportRecord(
                    product_uid=package.product_uid,
                    package_version=package.version,
                    installation_set=config.installation_set,
                    total_objects=summary.total_objects,
                    install_count=summary.install_count,
                    skip_count=summary.skip_count,
                    indeterminate_count=summary.indeterminate_count,
                    error_count=summary.error_count,
                    objects=summary.objects,
                    duration_ms=summary.duration_ms,
                    generated_at=summary.generated_at,
                )
            )
        logger.info(
            "Install decision pipeline completed: duration_ms={}, total_objects={}, install_count={}, skip_count={}, indeterminate_count={}, error_count={}",
            summary.duration_ms,
            summary.total_objects,
            summary.install_count,
            summary.skip_count,
            summary.indeterminate_count,
            summary.error_count,
        )
        return summary

    def _decide(self, index: int, obj: UpdateObject) -> ObjectDecisionRecord:
        if obj.install_if_different is None:
            logger.debug("Object without install-if-different, installing: index={}, filename={}", index, obj.filename)
            return ObjectDecisionRecord(
                index=index,
                filename=obj.filename,
                mode=obj.mode,
                proceed=True,
                reason="no_directive",
                indeterminate=False,
            )
        try:
            decision = self.checker.proceed(obj)
        except InstallIfDifferentError as exc:
            # Fatal for this object only; the remaining objects are still decided.
            logger.warning("Install decision failed: index={}, error_type={}, error={}", index, type(exc).__name__, exc)
            return ObjectDecisionRecord(
                index=index,
                filename=obj.filename,
                mode=obj.mode,
                proceed=False,
                reason=None,
                indeterminate=False,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        logger.debug(
            "Install decision: index={}, filename={}, proceed={}, reason={}",
            index,
            obj.filename,
            decision.proceed,
            decision.reason,
        )
        return ObjectDecisionRecord(
            index=index,
            filename=obj.filename,
            mode=obj.mode,
            proceed=decision.proceed,
            reason=decision.reason,
            indeterminate=decision.indeterminate,
        )
