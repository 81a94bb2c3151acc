"""Long-term sale report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from esop.models.results import LongTermReport
from esop.reports.formatting import register_filters

TEMPLATE_DIR = Path(__file__).parent / "templates"


class LongTermReportGenerator:
    """Generates the long-term sale report."""

    def __init__(self) -> None:
        self.env = register_filters(Environment(loader=FileSystemLoader(str(TEMPLATE_DIR))))

    def render(self, report: LongTermReport) -> str:
        """Render long-term sale report."""
        template = self.env.get_template("long_term_report.txt")
        return template.render(report=report, inputs=report.inputs)
