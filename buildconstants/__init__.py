"""
build-constants — generate a Java class holding build information constants.
"""

__version__ = "0.1.0"
