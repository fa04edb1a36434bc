"""
Generator defaults — used when a flag or rule attribute is omitted.

Paths are relative to the directory the generator runs in (the
workspace root when invoked by a build rule).
"""

DEFAULT_PACKAGE = "codegen"
DEFAULT_TEMPLATE_PATH = "factory/templates/things.tmpl"
DEFAULT_CONFIG_PATH = "factory/config/base.json"
DEFAULT_OUT_PATH = "out.go"
