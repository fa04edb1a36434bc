"""
codegen-factory — render source files from JSON config and text templates.
"""

__version__ = "0.1.0"
