"""Vested options (same-day sale) report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from esop.models.results import VestedReport
from esop.reports.formatting import register_filters

TEMPLATE_DIR = Path(__file__).parent / "templates"


class VestedReportGenerator:
    """Generates the same-day sale report."""

    def __init__(self) -> None:
        self.env = register_filters(Environment(loader=FileSystemLoader(str(TEMPLATE_DIR))))

    def render(self, report: VestedReport) -> str:
        """Render same-day sale report."""
        template = self.env.get_template("vested_report.txt")
        return template.render(report=report, inputs=report.inputs)
