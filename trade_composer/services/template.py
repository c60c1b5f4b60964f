"""
Placeholder template composer.

Templates are parsed once into a small node tree and then rendered against a
context, so substituted values are never scanned for placeholders again.

Syntax:
    {{NAME}} or <<<NAME>>>              scalar placeholder
    {{#each LIST}}...{{/each}}          repeated once per list item
    {{#if NAME}}...{{else}}...{{/if}}   conditional section

Inside an each block, {{name}}, {{email}} and {{domains}} read the current
entity, {{this}} the current string item, any key the current mapping item,
and {{@index}} / {{@number}} the 0- and 1-based position.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from trade_composer.config import settings
from trade_composer.core.logging import get_logger
from trade_composer.core.models import Entity, RenderedTemplate

log = get_logger(__name__)

_TAG = re.compile(r"\{\{\s*(?P<mustache>[^{}]*?)\s*\}\}|<<<\s*(?P<angle>[^<>]*?)\s*>>>")
_NAME = re.compile(r"^[\w.@]+$")


class TemplateSyntaxError(ValueError):
    """A block is left open or closed by the wrong tag."""

    def __init__(self, message: str, line: int):
        self.line = line
        super().__init__(f"{message} (line {line})")


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class Unknown:
    """A tag that is not valid placeholder syntax; always stripped."""

    raw: str


@dataclass(frozen=True)
class Each:
    name: str
    body: tuple["Node", ...]


@dataclass(frozen=True)
class Conditional:
    name: str
    body: tuple["Node", ...]
    orelse: tuple["Node", ...] = ()


Node = Union[Text, Scalar, Unknown, Each, Conditional]


@dataclass(frozen=True)
class Template:
    nodes: tuple[Node, ...]
    source: str = ""


@dataclass
class _OpenBlock:
    kind: str
    name: str
    line: int
    body: list = field(default_factory=list)
    orelse: list | None = None

    @property
    def current(self) -> list:
        return self.orelse if self.orelse is not None else self.body

    def close(self) -> Node:
        if self.kind == "each":
            return Each(self.name, tuple(self.body))
        return Conditional(self.name, tuple(self.body), tuple(self.orelse or ()))


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def parse_template(text: str) -> Template:
    """
    Parse template text into a node tree.

    Raises:
        TemplateSyntaxError: On an unclosed block, a stray closing tag,
            or a closing tag that does not match the innermost open block
    """
    root: list[Node] = []
    stack: list[_OpenBlock] = []
    pos = 0

    def target() -> list:
        return stack[-1].current if stack else root

    for match in _TAG.finditer(text):
        if match.start() > pos:
            target().append(Text(text[pos:match.start()]))
        pos = match.end()
        line = _line_of(text, match.start())

        angle = match.group("angle")
        if angle is not None:
            target().append(Scalar(angle) if _NAME.match(angle) else Unknown(match.group(0)))
            continue

        tag = match.group("mustache")
        keyword, _, argument = tag.partition(" ")
        argument = argument.strip()

        if keyword in ("#each", "#if") and _NAME.match(argument):
            stack.append(_OpenBlock(kind=keyword[1:], name=argument, line=line))
        elif keyword in ("/each", "/if") and not argument:
            kind = keyword[1:]
            if not stack:
                raise TemplateSyntaxError(f"Unexpected {{{{{keyword}}}}} with no open block", line)
            if stack[-1].kind != kind:
                raise TemplateSyntaxError(
                    f"{{{{{keyword}}}}} does not match open {{{{#{stack[-1].kind} {stack[-1].name}}}}}", line
                )
            block = stack.pop()
            target().append(block.close())
        elif keyword == "else" and not argument:
            if not stack or stack[-1].kind != "if" or stack[-1].orelse is not None:
                raise TemplateSyntaxError("{{else}} outside an if block", line)
            stack[-1].orelse = []
        elif _NAME.match(tag):
            target().append(Scalar(tag))
        else:
            target().append(Unknown(match.group(0)))

    if pos < len(text):
        target().append(Text(text[pos:]))
    if stack:
        block = stack[-1]
        raise TemplateSyntaxError(f"Unclosed {{{{#{block.kind} {block.name}}}}} block", block.line)

    return Template(nodes=tuple(root), source=text)


@dataclass(frozen=True)
class TemplateContext:
    """Values a template is rendered against."""

    scalars: Mapping[str, Any] = field(default_factory=dict)
    lists: Mapping[str, Sequence[Any]] = field(default_factory=dict)
    defaults: Mapping[str, str] = field(default_factory=dict)


_MISSING = object()


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple)) and not value)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(_stringify(v) for v in value)
    if isinstance(value, Entity):
        return value.name
    return str(value)


def _item_scope(item: Any, index: int) -> dict[str, Any]:
    if isinstance(item, Entity):
        scope = {"this": item.name, **item.fields()}
    elif isinstance(item, Mapping):
        scope = dict(item)
    else:
        scope = {"this": item}
    scope["@index"] = index
    scope["@number"] = index + 1
    return scope


def _lookup(mapping: Mapping[str, Any], name: str) -> Any:
    if name in mapping:
        return mapping[name]
    if "." in name:
        value: Any = mapping
        for part in name.split("."):
            if not isinstance(value, Mapping) or part not in value:
                return _MISSING
            value = value[part]
        return value
    return _MISSING


class _Render:
    """State of one render pass."""

    def __init__(self, context: TemplateContext):
        self.context = context
        self.parts: list[str] = []
        self.unresolved: dict[str, None] = {}

    def value(self, name: str, scopes: Sequence[Mapping[str, Any]]) -> Any:
        for scope in reversed(scopes):
            found = _lookup(scope, name)
            if found is not _MISSING:
                return found
        for source in (self.context.scalars, self.context.lists):
            found = _lookup(source, name)
            if found is not _MISSING:
                return found
        return _MISSING

    def run(self, nodes: Sequence[Node], scopes: list[Mapping[str, Any]]) -> None:
        for node in nodes:
            if isinstance(node, Text):
                self.parts.append(node.value)
            elif isinstance(node, Scalar):
                self.scalar(node.name, scopes)
            elif isinstance(node, Each):
                self.each(node, scopes)
            elif isinstance(node, Conditional):
                value = self.value(node.name, scopes)
                truthy = value is not _MISSING and not _is_empty(value) and value is not False
                self.run(node.body if truthy else node.orelse, scopes)
            else:
                self.unresolved[node.raw] = None

    def scalar(self, name: str, scopes: list[Mapping[str, Any]]) -> None:
        value = self.value(name, scopes)
        if value is _MISSING or _is_empty(value):
            value = self.context.defaults.get(name)
        if _is_empty(value):
            self.unresolved[name] = None
            return
        self.parts.append(_stringify(value))

    def each(self, node: Each, scopes: list[Mapping[str, Any]]) -> None:
        items = self.value(node.name, scopes)
        if items is _MISSING or items is None:
            self.unresolved[node.name] = None
            return
        if isinstance(items, (str, Mapping)) or not isinstance(items, Sequence):
            items = [items]
        for index, item in enumerate(items):
            self.run(node.body, [*scopes, _item_scope(item, index)])


class TemplateComposer:
    """
    Renders parsed templates.

    Placeholders with no value and no default are stripped. In strict mode
    each stripped placeholder is also reported as a warning.
    """

    def __init__(self, strict: bool | None = None):
        self.strict = settings.strict_placeholders if strict is None else strict

    def render(self, template: Template | str, context: TemplateContext | None = None) -> RenderedTemplate:
        """
        Render a template against a context.

        Args:
            template: Parsed template, or raw text to parse first
            context: Scalars, lists and defaults (empty if omitted)

        Returns:
            RenderedTemplate with the final text and stripped placeholder names
        """
        if isinstance(template, str):
            template = parse_template(template)
        state = _Render(context or TemplateContext())
        state.run(template.nodes, [])

        unresolved = tuple(state.unresolved)
        warnings: tuple[str, ...] = ()
        if unresolved:
            if self.strict:
                warnings = tuple(f"Unresolved placeholder '{name}' stripped" for name in unresolved)
                for name in unresolved:
                    log.warning("placeholder_unresolved", placeholder=name)
            else:
                log.debug("placeholders_stripped", placeholders=list(unresolved))

        return RenderedTemplate(text="".join(state.parts), unresolved=unresolved, warnings=warnings)


def render_template(text: str, context: TemplateContext | None = None, strict: bool | None = None) -> RenderedTemplate:
    """Parse and render in one call."""
    return TemplateComposer(strict=strict).render(parse_template(text), context)
