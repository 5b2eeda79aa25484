from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import typer

from .compare import MISMATCH_THRESHOLD, compare_screenshots
from .report import REPORT_FILENAME, Report, ReportRow

BASELINE_DIRNAME = "imageSnapshots-master"
CANDIDATE_DIRNAME = "imageSnapshots"
DIFF_DIRNAME = "imageDiffSnapshots"


@dataclass(frozen=True)
class RunConfig:
    root: Path = Path(".")
    threshold: float = MISMATCH_THRESHOLD

    @property
    def baseline_dir(self) -> Path:
        return self.root / BASELINE_DIRNAME

    @property
    def candidate_dir(self) -> Path:
        return self.root / CANDIDATE_DIRNAME

    @property
    def diff_dir(self) -> Path:
        return self.root / DIFF_DIRNAME

    @property
    def report_path(self) -> Path:
        return self.root / REPORT_FILENAME


@dataclass
class RunResult:
    report_path: Path
    missing: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    passed: list[str] = field(default_factory=list)
    mismatches: list[tuple[str, float]] = field(default_factory=list)

    @property
    def bad_case_count(self) -> int:
        return len(self.mismatches)


def list_pngs(directory: Path) -> list[str]:
    if not directory.is_dir():
        raise FileNotFoundError(f"Snapshot directory not found: {directory}")
    return sorted(p.name for p in directory.glob("*.png"))


def classify(baseline: list[str], candidate: list[str]) -> tuple[list[str], list[str]]:
    """Return (missing, added): names only in baseline, names only in candidate."""
    base_set, cand_set = set(baseline), set(candidate)
    missing = [n for n in baseline if n not in cand_set]
    added = [n for n in candidate if n not in base_set]
    return missing, added


def _pretty_list(names: list[str]) -> str:
    return "\n".join(f" * {n}" for n in names)


def run_visual_regression(cfg: RunConfig) -> RunResult:
    typer.secho("Checking image snapshots against baseline", fg=typer.colors.BLUE)
    typer.echo()

    baseline_files = list_pngs(cfg.baseline_dir)
    candidate_files = list_pngs(cfg.candidate_dir)

    result = RunResult(report_path=cfg.report_path)
    result.missing, result.added = classify(baseline_files, candidate_files)
    if result.missing:
        typer.secho("Missing images compared to baseline:", fg=typer.colors.RED)
        typer.echo(_pretty_list(result.missing) + "\n")
    # new images are listed but never compared
    if result.added:
        typer.secho("Added images:", fg=typer.colors.GREEN)
        typer.echo(_pretty_list(result.added) + "\n")

    cfg.diff_dir.mkdir(parents=True, exist_ok=True)

    report = Report()
    for name in baseline_files:
        baseline_path = cfg.baseline_dir / name
        candidate_path = cfg.candidate_dir / name
        diff_path = cfg.diff_dir / name

        if not candidate_path.exists():
            typer.secho(f"Missing image: {name}\n", fg=typer.colors.RED)
            continue

        percent = compare_screenshots(
            baseline_path, candidate_path, diff_path, threshold=cfg.threshold
        )
        if percent > 0:
            typer.echo(
                "Mismatched pixels for: "
                + typer.style(name, fg=typer.colors.YELLOW)
                + f" {percent:.2f}%\n"
            )
            result.mismatches.append((name, percent))
            report.add(ReportRow.from_paths(name, baseline_path, candidate_path, diff_path))
        else:
            typer.echo("Passed for: " + typer.style(name, fg=typer.colors.GREEN) + "\n")
            result.passed.append(name)

    report.write(cfg.report_path)
    return result
