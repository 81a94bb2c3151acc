"""Options vs. shares comparison report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from esop.models.results import ComparisonReport
from esop.reports.formatting import register_filters

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ComparisonReportGenerator:
    """Generates the options vs. shares comparison report."""

    def __init__(self) -> None:
        self.env = register_filters(Environment(loader=FileSystemLoader(str(TEMPLATE_DIR))))

    def render(self, report: ComparisonReport) -> str:
        """Render options vs. shares comparison report."""
        template = self.env.get_template("comparison_report.txt")
        return template.render(report=report, inputs=report.inputs)
