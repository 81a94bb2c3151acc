"""Exercise-only report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from esop.models.results import ExerciseReport
from esop.reports.formatting import register_filters

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ExerciseReportGenerator:
    """Generates the exercise-only cost report."""

    def __init__(self) -> None:
        self.env = register_filters(Environment(loader=FileSystemLoader(str(TEMPLATE_DIR))))

    def render(self, report: ExerciseReport) -> str:
        """Render exercise-only cost report."""
        template = self.env.get_template("exercise_report.txt")
        return template.render(report=report, inputs=report.inputs)
