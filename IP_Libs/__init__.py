"""
IP_Libs - Image Pipeline Library Modules

This package contains the core functionality for the image processing
pipeline, organized into specialized sub-packages:

- ImageEditingLib: Pixel buffers, filter specifications and pixel operations
- PipelineLib: Decoding, orientation correction, filter chain execution and encoding
"""

__version__ = "0.1.0"
