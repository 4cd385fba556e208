"""
Image Pipeline Examples

Demonstrates decoding under a memory cap, orientation correction,
filter chains, error results and batch processing.
"""

import io
import sys
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image
from IP_Libs.ImageEditingLib.filter_specs import (
    ColorAdjust,
    Crop,
    Effect,
    EffectKind,
    FilterChain,
    NormalizedRect,
    Resize,
    Rotate,
)
from IP_Libs.PipelineLib.decoder import compute_subsample_factor
from IP_Libs.PipelineLib.image_processor import ImageProcessor, ProcessingJob, process_image
from IP_Libs.PipelineLib.pipeline_config import PipelineConfig


def make_jpeg(size, orientation=None):
    """Encode a solid JPEG, optionally tagged with an EXIF orientation."""
    kwargs = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        kwargs["exif"] = exif
    out = io.BytesIO()
    Image.new("RGB", size, (200, 90, 40)).save(out, format="JPEG", **kwargs)
    return out.getvalue()


def describe_output(path):
    with Image.open(path) as img:
        return f"{img.format} {img.size[0]}x{img.size[1]}"


def example_large_photo(output_dir):
    """Example: A photo larger than the decode cap."""
    print("=" * 60)
    print("Example 1: Decode Cap + Resize + Rotate")
    print("=" * 60)

    size = (8000, 6000)
    factor = compute_subsample_factor(*size)
    print(f"Source: {size[0]}x{size[1]}, subsample factor {factor}")

    target = output_dir / "large.jpg"
    result = process_image(make_jpeg(size), [Resize(1024, 1024), Rotate(90)], target)

    if result.ok:
        print(f"✓ Written: {result.output_location} ({describe_output(target)})")
    else:
        print(f"❌ FAILED: {result.message}")

    print()


def example_orientation(output_dir):
    """Example: EXIF orientation is applied before filters."""
    print("=" * 60)
    print("Example 2: EXIF Orientation")
    print("=" * 60)

    target = output_dir / "rotated.jpg"
    result = process_image(make_jpeg((400, 200), orientation=6), [], target)

    print("Source: 400x200 tagged 'rotate 90 clockwise'")
    print(f"✓ Output: {describe_output(target)}" if result.ok else f"❌ {result.message}")
    print()


def example_filter_chain(output_dir):
    """Example: Building a chain from dictionaries."""
    print("=" * 60)
    print("Example 3: Filter Chain")
    print("=" * 60)

    chain = FilterChain([
        Crop(NormalizedRect(0.1, 0.1, 0.9, 0.9)),
        ColorAdjust(brightness=10, contrast=1.2, saturation=0.8),
        Effect(EffectKind.VIGNETTE),
    ])
    restored = FilterChain.from_dicts(chain.to_dicts())
    print(f"Chain: {restored}")
    print(f"Round trip equal: {restored == chain}")

    config = PipelineConfig(output_format="PNG", vignette_strength=0.8)
    target = output_dir / "styled.png"
    result = process_image(make_jpeg((640, 480)), restored, target, config)

    print(f"✓ Output: {describe_output(target)}" if result.ok else f"❌ {result.message}")
    print()


def example_errors(output_dir):
    """Example: Failures are reported as Error results."""
    print("=" * 60)
    print("Example 4: Error Results")
    print("=" * 60)

    target = output_dir / "never.jpg"

    result = process_image(b"not an image", [], target)
    print(f"Garbage source -> {result}")

    result = process_image(
        make_jpeg((100, 100)),
        [Resize(50, 50), Crop(NormalizedRect(0.9, 0.0, 0.1, 1.0))],
        target,
    )
    print(f"Inverted crop  -> {result}")
    print(f"Target exists: {target.exists()}")
    print()


def example_batch(output_dir):
    """Example: Independent jobs on a thread pool."""
    print("=" * 60)
    print("Example 5: Batch Processing")
    print("=" * 60)

    jobs = [
        ProcessingJob(make_jpeg((300, 200)), [Effect(kind)], output_dir / f"{kind.value}.jpg")
        for kind in EffectKind
    ]
    results = ImageProcessor().process_many(jobs, max_workers=4)

    for job, result in zip(jobs, results):
        status = "✓" if result.ok else "❌"
        print(f"{status} {Path(job.target).name}: {result}")
    print()


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as temp_dir:
        output_dir = Path(temp_dir)
        example_large_photo(output_dir)
        example_orientation(output_dir)
        example_filter_chain(output_dir)
        example_errors(output_dir)
        example_batch(output_dir)
