#!/usr/bin/env python3
"""
Template renderer for media file format strings.

Format strings are read one character at a time:
- a directive letter renders one field of the file (L, O, C, E, Y, P for
  every file; file kinds add their own letters)
- ? renders the next directive only if it is not blank; ?( ... ) renders a
  bracket group and drops it entirely when any field inside came out empty
- \\ emits the next character literally
- anything else is emitted as-is

Example: "C?( (Y)).E" gives "Heat (1995).mkv", or "Heat.mkv" when the year
is unknown.
"""

from typing import Callable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .cache import BracketCache, default_bracket_cache
from .errors import TemplateSyntaxError

DirectiveTable = Mapping[str, Callable[[], str]]

CONDITIONAL = '?'
ESCAPE = '\\'
GROUP_OPEN = '('
GROUP_CLOSE = ')'


class RenderStep(NamedTuple):
    """Output of one directive and the last template index it consumed."""
    text: str
    end: int


class RenderSource:
    """Anything that can be rendered: supplies an ordered chain of directive tables."""

    def directive_chain(self) -> Sequence[DirectiveTable]:
        raise NotImplementedError


def is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def find_bracketed(template: str, start: int) -> str:
    """
    Return the contents of the bracket group opening at start.

    Escaped characters never open or close a group.

    Raises:
        TemplateSyntaxError: If the group is never closed
    """
    if start >= len(template) or template[start] != GROUP_OPEN:
        raise TemplateSyntaxError(f"Expected '(' at index {start} of {template!r}")

    depth = 0
    index = start
    while index < len(template):
        char = template[index]
        if char == ESCAPE:
            index += 2
            continue
        if char == GROUP_OPEN:
            depth += 1
        elif char == GROUP_CLOSE:
            depth -= 1
            if depth == 0:
                return template[start + 1:index]
        index += 1

    raise TemplateSyntaxError(f"Unterminated bracket group at index {start} of {template!r}")


class TemplateRenderer:
    """Recursive interpreter for the format mini-language."""

    def __init__(self, bracket_cache: Optional[BracketCache] = None):
        self.bracket_cache = bracket_cache if bracket_cache is not None else default_bracket_cache

    def render(self, template: str, source: RenderSource) -> str:
        """Render a whole format string against source."""
        chain = list(source.directive_chain())
        return self._render(template, chain)

    def render_at(self, template: str, index: int, source: RenderSource) -> Tuple[str, int]:
        """
        Render the single directive at index.

        Returns:
            (rendered text, index of the last template character consumed)
        """
        step = self._step(template, index, list(source.directive_chain()))
        return step.text, step.end

    def bracketed(self, template: str, start: int) -> str:
        """Memoized find_bracketed."""
        return self.bracket_cache.get_or_compute(
            (template, start), lambda: find_bracketed(template, start)
        )

    def _render(self, template: str, chain: List[DirectiveTable]) -> str:
        parts: List[str] = []
        index = 0
        while index < len(template):
            step = self._step(template, index, chain)
            parts.append(step.text)
            index = step.end + 1
        return "".join(parts)

    def _step(self, template: str, index: int, chain: List[DirectiveTable]) -> RenderStep:
        if index >= len(template):
            return RenderStep("", index)

        char = template[index]

        if char == CONDITIONAL:
            return self._conditional(template, index, chain)

        if char == ESCAPE:
            index += 1
            literal = template[index] if index < len(template) else ""
            return RenderStep(literal, index)

        for table in chain:
            directive = table.get(char)
            if directive is not None:
                return RenderStep(directive() or "", index)

        return RenderStep(char, index)

    def _conditional(self, template: str, index: int, chain: List[DirectiveTable]) -> RenderStep:
        """
        Render what follows a '?' and drop it when it carries no field data.

        A bracket group is dropped when its rendering is blank, equal to the
        raw group text (only literals inside), or shorter than the raw text
        (some field inside rendered empty).
        """
        if index + 1 >= len(template):
            return RenderStep("", index)

        if template[index + 1] == GROUP_OPEN:
            raw = self.bracketed(template, index + 1)
            end = index + len(raw) + 2
            text = "" if is_blank(raw) else self._render(raw, chain)
            if is_blank(text) or text == raw or len(text) < len(raw):
                text = ""
            return RenderStep(text, end)

        step = self._step(template, index + 1, chain)
        return RenderStep("" if is_blank(step.text) else step.text, step.end)
