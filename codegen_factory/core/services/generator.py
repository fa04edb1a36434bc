"""
Generator — render a source file from a JSON config and a template.

Flow:
    load config → set Package → read template → parse → render
    → ensure package declaration → atomic write

Every step either succeeds or raises a GeneratorError subclass. The
config is loaded first, so a malformed config fails before the
template is touched.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from codegen_factory.core.config.defaults import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_OUT_PATH,
    DEFAULT_PACKAGE,
    DEFAULT_TEMPLATE_PATH,
)
from codegen_factory.core.config.loader import load_configuration
from codegen_factory.core.errors import RenderError, TemplateError
from codegen_factory.core.models.configuration import Configuration
from codegen_factory.core.models.generated import GeneratedFile
from codegen_factory.core.persistence.output_file import write_output
from codegen_factory.core.services.template_engine import Template, parse_template

logger = logging.getLogger(__name__)

# Whitespace and comments allowed before the package clause
_LEADING_TRIVIA_RE = re.compile(r"(?:\s+|//[^\n]*|/\*.*?\*/)*", re.DOTALL)
_PACKAGE_KEYWORD_RE = re.compile(r"package\b")
_PACKAGE_CLAUSE_RE = re.compile(r"package\s+([^\W\d]\w*)(?![\w.])")


def read_template(path: Path) -> Template:
    """Read and parse a template file.

    Raises:
        TemplateError: If the file is unreadable or malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read template {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise TemplateError(f"Template {path} is not valid UTF-8: {e}") from e
    return parse_template(text, name=path.name)


def declared_package(source: str) -> str | None:
    """Package named by the source's package clause, or None if it has none.

    Leading whitespace, ``//`` line comments and ``/* */`` block comments
    are skipped; the first token after them must be ``package`` for the
    source to count as declaring one.

    Raises:
        RenderError: If the clause is there but names no identifier.
    """
    start = _LEADING_TRIVIA_RE.match(source).end()
    if not _PACKAGE_KEYWORD_RE.match(source, start):
        return None
    m = _PACKAGE_CLAUSE_RE.match(source, start)
    if m is None:
        line = source.count("\n", 0, start) + 1
        raise RenderError(f"line {line}: malformed package clause")
    return m.group(1)


def render_source(template: Template, config: Configuration, package: str) -> str:
    """Render a template to final source text.

    ``Package`` in the config is replaced by ``package``. If the rendered
    text does not declare a package itself, ``package <name>`` and a
    blank line are prepended.

    Raises:
        RenderError: If the template declares a different package.
    """
    config = config.with_package(package)
    body = template.execute(config)
    declared = declared_package(body)
    if declared is None:
        return f"package {package}\n\n{body}"
    if declared != package:
        raise RenderError(
            f"{template.name}: template declares package {declared}, expected {package}"
        )
    return body


def generate(
    package: str = DEFAULT_PACKAGE,
    template_path: Path | str = DEFAULT_TEMPLATE_PATH,
    config_path: Path | str = DEFAULT_CONFIG_PATH,
    out_path: Path | str = DEFAULT_OUT_PATH,
    model: type[Configuration] = Configuration,
) -> GeneratedFile:
    """Run the generator once and write the output file.

    Args:
        package: Package name for the declaration and ``{{.Package}}``.
        template_path: Template file.
        config_path: JSON config file.
        out_path: File to write.
        model: Configuration subclass declaring the template variables.

    Returns:
        The generated file as written.

    Raises:
        ConfigError, TemplateError, RenderError, OutputError
    """
    template_path = Path(template_path)
    config_path = Path(config_path)
    out_path = Path(out_path)

    config = load_configuration(config_path, model=model)
    template = read_template(template_path)
    content = render_source(template, config, package)
    write_output(out_path, content)

    logger.info(
        "Generated %s (package %s) from %s + %s",
        out_path, package, template_path, config_path,
    )
    return GeneratedFile(
        path=str(out_path),
        content=content,
        package=package,
        reason=f"Rendered {template_path} with {config_path}",
    )
