"""
Template engine for generator templates.

Templates are plain text files (usually real source files) with
actions between ``{{`` and ``}}``:

  1. Field substitution:   {{.Count}}   {{ .Material }}
  2. Whitespace trimming:  {{- .Count }} trims before, {{ .Count -}} after
  3. Comments:             {{/* dropped from the output */}}

Nothing else is an action. Values are inserted verbatim, with no
escaping for the host language.

Parsing and execution are separate steps so a malformed template is
reported before any configuration is applied to it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from codegen_factory.core.errors import RenderError, TemplateError
from codegen_factory.core.models.configuration import Configuration


# ── Delimiters ─────────────────────────────────────────────────────

LEFT_DELIM = "{{"
RIGHT_DELIM = "}}"

# "-" followed by whitespace right after "{{" / whitespace then "-" right before "}}"
_TRIM_LEFT_RE = re.compile(r"^-\s")
_TRIM_RIGHT_RE = re.compile(r"\s-$")
# Comments hug the delimiters: {{/* or {{- /*, and */}} or */ -}}
_COMMENT_OPEN_RE = re.compile(r"(-\s)?/\*")
_COMMENT_CLOSE_RE = re.compile(r"\*/(\s-)?\}\}")
_FIELD_RE = re.compile(r"^\.([A-Za-z_][A-Za-z0-9_]*)$")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


# ── Parse tree ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldNode:
    """A ``{{.Name}}`` placeholder."""

    name: str
    line: int


@dataclass
class Template:
    """A parsed template: literal text interleaved with field nodes."""

    name: str
    nodes: list[str | FieldNode] = field(default_factory=list)

    @property
    def fields(self) -> list[str]:
        """Field names referenced, in order of first use."""
        seen: list[str] = []
        for node in self.nodes:
            if isinstance(node, FieldNode) and node.name not in seen:
                seen.append(node.name)
        return seen

    def execute(self, config: Configuration) -> str:
        """Render the template against a configuration.

        Raises:
            RenderError: If a placeholder names a field the config lacks.
        """
        parts: list[str] = []
        for node in self.nodes:
            if isinstance(node, str):
                parts.append(node)
                continue
            try:
                value = config.lookup(node.name)
            except KeyError:
                raise RenderError(
                    f"{self.name}:{node.line}: can't evaluate field "
                    f"{node.name} in {type(config).__name__}"
                ) from None
            parts.append(format_value(value))
        return "".join(parts)


def format_value(value: object) -> str:
    """Text form of a config value as it appears in rendered output.

    Unpaired surrogates (legal in JSON ``\\ud800`` escapes, not in
    UTF-8) become U+FFFD.
    """
    if value is None:
        return "<no value>"
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if _SURROGATE_RE.search(text):
        text = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return text


# ── Parsing ────────────────────────────────────────────────────────


def parse_template(text: str, name: str = "template") -> Template:
    """Parse template text into a Template.

    Raises:
        TemplateError: On an unclosed action or comment, an empty
            action, or anything other than a field reference or comment.
    """
    template = Template(name=name)
    nodes = template.nodes
    pos = 0
    trim_next = False

    while True:
        start = text.find(LEFT_DELIM, pos)
        literal = text[pos:] if start == -1 else text[pos:start]
        if trim_next:
            literal = literal.lstrip()
        if literal:
            nodes.append(literal)
        if start == -1:
            break

        line = text.count("\n", 0, start) + 1
        body_start = start + len(LEFT_DELIM)

        comment = _COMMENT_OPEN_RE.match(text, body_start)
        if comment:
            close = text.find("*/", comment.end())
            if close == -1:
                raise TemplateError(f"{name}:{line}: unclosed comment", line=line)
            closing = _COMMENT_CLOSE_RE.match(text, close)
            if closing is None:
                raise TemplateError(
                    f"{name}:{line}: comment ends before closing delimiter", line=line
                )
            trim_left = comment.group(1) is not None
            trim_right = closing.group(1) is not None
            end = closing.end() - len(RIGHT_DELIM)
            node = None
        else:
            end = text.find(RIGHT_DELIM, body_start)
            if end == -1:
                raise TemplateError(f"{name}:{line}: unclosed action", line=line)
            inner = text[body_start:end]
            trim_left = bool(_TRIM_LEFT_RE.match(inner))
            trim_right = bool(_TRIM_RIGHT_RE.search(inner))
            body = inner[1:] if trim_left else inner
            body = body[:-1] if trim_right else body
            node = _parse_action(body.strip(), name, line)

        if trim_left and nodes and isinstance(nodes[-1], str):
            kept = nodes[-1].rstrip()
            if kept:
                nodes[-1] = kept
            else:
                nodes.pop()
        if node is not None:
            nodes.append(node)

        trim_next = trim_right
        pos = end + len(RIGHT_DELIM)

    return template


def _parse_action(body: str, name: str, line: int) -> FieldNode:
    """Turn the text between delimiters into a node."""
    if not body:
        raise TemplateError(f"{name}:{line}: missing value for action", line=line)
    m = _FIELD_RE.match(body)
    if m is None:
        raise TemplateError(
            f"{name}:{line}: unsupported action {LEFT_DELIM}{body}{RIGHT_DELIM}",
            line=line,
        )
    return FieldNode(name=m.group(1), line=line)


def render(template: Template, config: Configuration) -> str:
    """Execute a parsed template. Thin alias for ``Template.execute``."""
    return template.execute(config)
