"""Stylesheet parsing: lark statement tree to a tree of selector scopes.

The lark grammar only recovers nesting (blocks and declarations).  The scope
builder then classifies each declaration as a variable binding or a property
and each block as a nested scope, an addition to the base scope (global
selectors) or an unsupported at-rule.

A :class:`Stylesheet` wraps one document's text and parses it at most once;
the result is delivered through a :class:`concurrent.futures.Future`.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import Executor, Future
from functools import lru_cache
from pathlib import Path
from typing import Callable, Sequence, Union

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from figsync.config import DEFAULT_GLOBAL_SELECTORS
from figsync.errors import StylesheetParseError
from figsync.model.source import SourcePosition, SourceRange
from figsync.stylesheet.scope import ScopeTree, StylesheetScope

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Quoted strings are matched so that comment markers inside them survive.
# ``//`` after ``:`` or ``(`` is part of a URL, not a comment.
_COMMENT_RE = re.compile(
    r"""("(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')|/\*.*?\*/|(?<![:(\w])//[^\n]*""",
    re.DOTALL,
)
_VARIABLE_RE = re.compile(r"^@([\w-]+)\s*:(.*)$", re.DOTALL)
_PROPERTY_RE = re.compile(r"^(-?[A-Za-z_][\w-]*)\s*:(.*)$", re.DOTALL)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class Declaration:
    """A ``;``-terminated statement, e.g. ``color: red`` or ``@gap: 4px``."""

    def __init__(self, text: str, range: SourceRange) -> None:
        self.text = text
        self.range = range

    def __repr__(self) -> str:
        return f"Declaration({self.text!r})"


class Block:
    """A prelude (selector or at-rule) with a braced body."""

    def __init__(self, prelude: str, start: SourcePosition, statements: list[Statement]) -> None:
        self.prelude = prelude
        self.start = start
        self.statements = statements

    def __repr__(self) -> str:
        return f"Block({self.prelude!r}, {len(self.statements)} statements)"


Statement = Union[Declaration, Block]


def _strip_comments(text: str) -> str:
    return _COMMENT_RE.sub(lambda m: m.group(1) or "", text).strip()


def _token_range(token: Token) -> SourceRange:
    """Range of the token text with trailing whitespace left out."""
    text = str(token).rstrip()
    start = SourcePosition(token.line - 1, token.column - 1)
    newlines = text.count("\n")
    if newlines:
        end = SourcePosition(start.line + newlines, len(text) - text.rfind("\n") - 1)
    else:
        end = SourcePosition(start.line, start.column + len(text))
    return SourceRange(start, end)


class StatementTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a lark parse tree into :class:`Block` and :class:`Declaration` objects."""

    def declaration(self, items: list[Token]) -> Declaration:
        token = items[0]
        return Declaration(_strip_comments(str(token)), _token_range(token))

    def block(self, items: list[object]) -> Block:
        prelude = items[0]
        assert isinstance(prelude, Token)
        statements = [i for i in items[1:] if isinstance(i, (Block, Declaration))]
        return Block(
            " ".join(_strip_comments(str(prelude)).split()),
            SourcePosition(prelude.line - 1, prelude.column - 1),
            statements,
        )

    def start(self, items: list[object]) -> list[Statement]:
        return [i for i in items if isinstance(i, (Block, Declaration))]


@lru_cache(maxsize=1)
def _lark() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def parse_statements(text: str) -> list[Statement]:
    """Parse stylesheet text into top-level statements.

    Raises :class:`StylesheetParseError` when the braces do not balance.
    """
    try:
        tree = _lark().parse(text)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise StylesheetParseError(str(e), line=line, column=column, cause=e) from e
    return StatementTransformer().transform(tree)


# ---------------------------------------------------------------------------
# Scope building
# ---------------------------------------------------------------------------


def selector_range(lines: Sequence[str], start: SourcePosition) -> SourceRange | None:
    """Range of a selector, from *start* to its last character before ``{``.

    A block's own span runs to the end of its body, so the opening brace is
    searched for line by line, skipping quoted text.  Returns ``None`` when
    no brace follows.
    """
    end = start
    line, column = start.line, start.column
    quote = ""
    while line < len(lines):
        text = lines[line]
        while column < len(text):
            char = text[column]
            if quote:
                if char == quote:
                    quote = ""
            elif char in "\"'":
                quote = char
            elif char == "{":
                return SourceRange(start, end)
            if not char.isspace():
                end = SourcePosition(line, column + 1)
            column += 1
        line += 1
        column = 0
    return None


class _ScopeBuilder:
    def __init__(self, lines: Sequence[str], global_selectors: Sequence[str]) -> None:
        self.lines = lines
        self.global_selectors = set(global_selectors)

    def build(self, statements: list[Statement], scope: StylesheetScope) -> None:
        for statement in statements:
            if isinstance(statement, Block):
                self._block(statement, scope)
            else:
                self._declaration(statement, scope)

    def _declaration(self, statement: Declaration, scope: StylesheetScope) -> None:
        text = statement.text
        if not text:
            return
        match = _VARIABLE_RE.match(text)
        if match:
            scope.add_variable(match.group(1), match.group(2).strip(), statement.range)
            return
        match = _PROPERTY_RE.match(text)
        if match:
            scope.add_property(match.group(1), match.group(2).strip(), statement.range)
            return
        logger.debug("Skipping unsupported statement %r at %s", text, statement.range.start)

    def _block(self, statement: Block, scope: StylesheetScope) -> None:
        selector = statement.prelude
        if selector.startswith("@"):
            logger.debug("Skipping at-rule block %r at %s", selector, statement.start)
            return
        span = selector_range(self.lines, statement.start)
        if selector in self.global_selectors:
            scope.add_range(selector, span)
            self.build(statement.statements, scope)
            return
        child = StylesheetScope(selector, scope)
        scope.children.append(child)
        child.add_range(selector, span)
        self.build(statement.statements, child)


def build_scope_tree(
    text: str,
    *,
    root_selector: str = "body",
    global_selectors: Sequence[str] = DEFAULT_GLOBAL_SELECTORS,
) -> ScopeTree:
    """Parse *text* and return its scope tree rooted at a synthetic *root_selector* scope."""
    statements = parse_statements(text)
    base = StylesheetScope(root_selector)
    _ScopeBuilder(text.split("\n"), global_selectors).build(statements, base)
    tree = ScopeTree(base)
    logger.info("Parsed stylesheet: %d scope(s)", len(tree))
    return tree


# ---------------------------------------------------------------------------
# Document handle
# ---------------------------------------------------------------------------


class Stylesheet:
    """One stylesheet document and its (single) parse.

    Continuations registered with :meth:`when_parsed` run once the parse has
    settled, in registration order; registering after settlement runs the
    continuation immediately.  A failed parse skips every continuation and
    leaves the :class:`StylesheetParseError` on :attr:`future`.
    """

    def __init__(
        self,
        text: str,
        *,
        name: str = "<stylesheet>",
        root_selector: str = "body",
        global_selectors: Sequence[str] = DEFAULT_GLOBAL_SELECTORS,
    ) -> None:
        self.text = text
        self.name = name
        self.lines = text.split("\n")
        self.root_selector = root_selector
        self.global_selectors = tuple(global_selectors)
        self.future: Future[ScopeTree] = Future()
        self._started = False

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: object) -> Stylesheet:
        p = Path(path)
        return cls(p.read_text(encoding="utf-8"), name=str(p), **kwargs)  # type: ignore[arg-type]

    def line_at(self, line: int) -> str:
        return self.lines[line]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def parse(self, executor: Executor | None = None) -> Future[ScopeTree]:
        """Start the parse (inline without *executor*) and return its future."""
        if not self._started:
            self._started = True
            if executor is None:
                self._settle()
            else:
                executor.submit(self._settle)
        return self.future

    def _settle(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            tree = build_scope_tree(
                self.text,
                root_selector=self.root_selector,
                global_selectors=self.global_selectors,
            )
        except Exception as exc:
            logger.error("Could not parse %s: %s", self.name, exc)
            self.future.set_exception(exc)
        else:
            self.future.set_result(tree)

    def when_parsed(self, fn: Callable[[ScopeTree], None]) -> None:
        def _continue(future: Future[ScopeTree]) -> None:
            if future.cancelled() or future.exception() is not None:
                logger.debug("Parse of %s failed; skipping continuation %r", self.name, fn)
                return
            fn(future.result())

        self.future.add_done_callback(_continue)

    @property
    def parsed(self) -> bool:
        return self.future.done()

    def result(self, timeout: float | None = None) -> ScopeTree:
        """Block until parsed and return the tree, raising the parse error on failure."""
        return self.future.result(timeout)
