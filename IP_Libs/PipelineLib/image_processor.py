"""
Image processing pipeline.

Runs source -> decoder -> orientation correction -> filter chain -> encoder
and reports a single terminal ProcessingResult. The pipeline is synchronous
and holds no state between invocations; callers run it off latency-sensitive
threads, or use process_many() to run independent jobs on a thread pool.

Classes:
    Success: Result carrying the written output location
    Error: Result carrying a human-readable failure message
    ProcessingJob: One (source, filters, target) unit of work
    ImageProcessor: Pipeline runner bound to a PipelineConfig

Functions:
    process_image: Run the pipeline once with a default or given config

Example:
    >>> from IP_Libs.ImageEditingLib.filter_specs import Resize, Rotate
    >>> result = process_image("photo.jpg", [Resize(1024, 1024), Rotate(90)], "/tmp/out.jpg")
    >>> if result.ok:
    ...     print(result.output_location)
"""

import concurrent.futures
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from IP_Libs.errors import ImageProcessingError
from IP_Libs.ImageEditingLib.filter_specs import FilterSpec
from IP_Libs.PipelineLib.decoder import decode_image
from IP_Libs.PipelineLib.encoder import encode_image
from IP_Libs.PipelineLib.filter_chain import apply_filter_chain
from IP_Libs.PipelineLib.image_source import SourceLike, as_source
from IP_Libs.PipelineLib.orientation import correct_orientation
from IP_Libs.PipelineLib.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error while processing image"


@dataclass(frozen=True)
class Success:
    output_location: Path

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Error:
    message: str

    @property
    def ok(self) -> bool:
        return False


ProcessingResult = Union[Success, Error]


@dataclass(frozen=True)
class ProcessingJob:
    """One independent pipeline invocation."""
    source: Any
    filters: Sequence[FilterSpec]
    target: Union[str, Path]


class ImageProcessor:
    """Runs the decode / orient / filter / encode pipeline."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()

    def process(
        self,
        source: SourceLike,
        filters: Iterable[FilterSpec],
        target: Union[str, Path],
    ) -> ProcessingResult:
        """
        Process one image.

        Args:
            source: Path, encoded bytes, or ImageSource
            filters: Ordered filter specs
            target: Output path; overwritten on success, untouched on failure

        Returns:
            Success(target) or Error(message). Never raises for pipeline
            failures.
        """
        target_path = Path(target)
        try:
            image_source = as_source(source)
            buffer = decode_image(
                image_source,
                self.config.max_decode_width,
                self.config.max_decode_height,
            )
            buffer = correct_orientation(buffer, image_source)
            buffer = apply_filter_chain(buffer, filters, self.config)
            encode_image(buffer, target_path, self.config)
        except ImageProcessingError as e:
            logger.warning(f"Image processing failed for {target_path}: {e}")
            return Error(str(e) or UNKNOWN_ERROR_MESSAGE)
        except Exception as e:
            logger.exception(f"Unexpected error processing image for {target_path}")
            return Error(str(e) or UNKNOWN_ERROR_MESSAGE)

        logger.info(f"Processed image written to {target_path}")
        return Success(target_path)

    def process_job(self, job: ProcessingJob) -> ProcessingResult:
        return self.process(job.source, job.filters, job.target)

    def process_many(
        self,
        jobs: Sequence[ProcessingJob],
        max_workers: Optional[int] = None,
    ) -> List[ProcessingResult]:
        """
        Run independent jobs concurrently on a thread pool.

        Jobs share no state; each must have its own target. Results are
        returned in job order.

        Args:
            jobs: Jobs to run
            max_workers: Maximum number of threads (default: None = executor default)

        Returns:
            One ProcessingResult per job
        """
        targets = [Path(job.target) for job in jobs]
        if len(set(targets)) != len(targets):
            raise ValueError("Each job in a batch must write to a distinct target")

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.process_job, jobs))


def process_image(
    source: SourceLike,
    filters: Iterable[FilterSpec],
    target: Union[str, Path],
    config: Optional[PipelineConfig] = None,
) -> ProcessingResult:
    """Run the pipeline once. See ImageProcessor.process()."""
    return ImageProcessor(config).process(source, filters, target)
