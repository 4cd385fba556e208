"""
PipelineLib - Image processing pipeline

This module decodes a source image under a memory cap, corrects its
orientation, applies an ordered filter chain and encodes the result.
"""

from IP_Libs.PipelineLib.image_source import (
    ImageSource,
    FileSource,
    BytesSource,
    as_source,
)
from IP_Libs.PipelineLib.pipeline_config import PipelineConfig
from IP_Libs.PipelineLib.decoder import (
    compute_subsample_factor,
    read_image_bounds,
    decode_image,
)
from IP_Libs.PipelineLib.orientation import (
    OrientationTag,
    read_orientation,
    correct_orientation,
)
from IP_Libs.PipelineLib.filter_chain import apply_filter, apply_filter_chain
from IP_Libs.PipelineLib.encoder import encode_image
from IP_Libs.PipelineLib.image_processor import (
    Success,
    Error,
    ProcessingResult,
    ProcessingJob,
    ImageProcessor,
    process_image,
)

__all__ = [
    "ImageSource",
    "FileSource",
    "BytesSource",
    "as_source",
    "PipelineConfig",
    "compute_subsample_factor",
    "read_image_bounds",
    "decode_image",
    "OrientationTag",
    "read_orientation",
    "correct_orientation",
    "apply_filter",
    "apply_filter_chain",
    "encode_image",
    "Success",
    "Error",
    "ProcessingResult",
    "ProcessingJob",
    "ImageProcessor",
    "process_image",
]
