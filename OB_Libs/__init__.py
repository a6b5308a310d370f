"""
OB_Libs - Open Blend Library Modules

This package contains core functionality for the Open Blend project,
organized into specialized sub-packages:

- ImageEditingLib: Image data models and error types
- NodesLib: Pipeline stages (import/normalize, resize, layer compositor, output)
- PipelineLib: Run configuration, input scanning, backend registry and driver
"""

__version__ = "0.1.0"
