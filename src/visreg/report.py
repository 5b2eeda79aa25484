from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

REPORT_FILENAME = "visual-regression-report.md"
NO_DIFF_MESSAGE = "No visual diff differences have been found"


def _b64(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("ascii")


@dataclass(frozen=True)
class ReportRow:
    name: str
    expected: str
    actual: str
    diff: str

    @classmethod
    def from_paths(
        cls, name: str, baseline: Path, candidate: Path, diff: Path
    ) -> ReportRow:
        """Read the three images of a mismatching pair as base64."""
        return cls(
            name=Path(name).name,
            expected=_b64(baseline),
            actual=_b64(candidate),
            diff=_b64(diff),
        )


@dataclass
class Report:
    rows: list[ReportRow] = field(default_factory=list)

    def add(self, row: ReportRow) -> None:
        self.rows.append(row)

    @property
    def bad_case_count(self) -> int:
        return len(self.rows)

    def render(self) -> str:
        if not self.rows:
            return NO_DIFF_MESSAGE
        templates_dir = Path(__file__).parent / "templates"
        env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        tpl = env.get_template("report.md.j2")
        return tpl.render(rows=self.rows)

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        return path
