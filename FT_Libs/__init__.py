"""
FT_Libs - Filter Tool Library Modules

This package contains core functionality for the Filter Tool project,
organized into specialized sub-packages:

- FiltersLib: The color range keep/remove filter and the OpenCV backed filters
- WorkbenchLib: Working image management, menu catalog, preferences and image I/O
"""

__version__ = "0.1.0"
