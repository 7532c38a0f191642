import json
from pathlib import Path

from src.config.logger_config import logger
from src.install_if_different.application.contracts import DecisionReportRecord
from src.install_if_different.application.ports import DecisionReportSinkPort


class JsonReportSink(DecisionReportSinkPort):
    """Writes the report to a ``.partial`` sibling, then renames it over ``report_path``."""

    PARTIAL_SUFFIX = ".partial"

    def __init__(self, report_path: str) -> None:
        self.report_path = Path(report_path)
        self.report_path.parent.mkdir(parents=True, exist_ok=True)

    def write_report(self, report: DecisionReportRecord) -> None:
        partial = self.report_path.with_name(self.report_path.name + self.PARTIAL_SUFFIX)
        payload = report.to_dict()
        with partial.open("w", encoding="utf-8") as fp:
            json.dump(payload, fp, ensure_ascii=False, indent=2)
        partial.replace(self.report_path)
        logger.info(
            "Install decision report written: report_path={}, objects={}, error_count={}",
            str(self.report_path),
            len(payload["objects"]),
            report.error_count,
        )
