from __future__ import annotations

from pathlib import Path

import typer

from .compare import MISMATCH_THRESHOLD
from .runner import RunConfig, run_visual_regression

app = typer.Typer(add_completion=False)


@app.command()
def main(
    root: Path = typer.Option(Path("."), "--root", "-r", exists=True, file_okay=False),  # noqa: B008
    threshold: float = typer.Option(MISMATCH_THRESHOLD, "--threshold"),  # noqa: B008
):
    """Compare screenshot snapshots against the baseline and write a Markdown report."""
    cfg = RunConfig(root=root, threshold=threshold)
    result = run_visual_regression(cfg)
    typer.echo(str(result.report_path))


if __name__ == "__main__":
    app()
