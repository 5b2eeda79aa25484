from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageOps
from pixelmatch.contrib.PIL import pixelmatch

MISMATCH_THRESHOLD = 0.1
PAD_COLOR = (255, 255, 255, 0)  # transparent white


def load_rgba(path: Path) -> Image.Image:
    with Image.open(path) as im:
        return im.convert("RGBA")


def fit_contain(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resize into `size` keeping aspect ratio, centred and padded with PAD_COLOR."""
    if image.size == size:
        return image
    return ImageOps.pad(
        image.convert("RGBA"),
        size,
        method=Image.Resampling.LANCZOS,
        color=PAD_COLOR,
    )


def compare_screenshots(
    baseline: Path,
    candidate: Path,
    diff_out: Path,
    threshold: float = MISMATCH_THRESHOLD,
) -> float:
    """Compare `candidate` against `baseline` and return the mismatch percentage.

    The candidate is fitted to the baseline's dimensions first, so the result
    is always relative to baseline width x height. A diff image is written to
    `diff_out` only when at least one pixel differs.
    """
    img1 = load_rgba(baseline)
    img2 = fit_contain(load_rgba(candidate), img1.size)

    diff = Image.new("RGBA", img1.size)
    diff_pixels = pixelmatch(img1, img2, diff, threshold=threshold)
    if diff_pixels:
        diff_out.parent.mkdir(parents=True, exist_ok=True)
        diff.save(diff_out, format="PNG")

    width, height = img1.size
    return diff_pixels / (width * height) * 100
