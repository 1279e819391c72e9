# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Line-oriented template rendering.

Templates are processed top to bottom, one line at a time:

- ``%for ...:`` / ``%endfor`` buffer a loop body, which is rendered by a
  nested engine once per element when the outermost ``%endfor`` is seen
- ``%if`` / ``%elif`` / ``%else:`` / ``%endif`` select which lines are kept
- ``<% ... %>`` runs a statement and splices in its output; a ``<%`` without
  a closing ``%>`` opens a block that runs until the line holding ``%>``
- ``${...}`` is replaced by the value of the expression
- lines that start with ``##`` after substitution are dropped

Every line that survives is emitted with a trailing newline.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from volk_gen.context import PipelineContext

from . import scope as kinds
from .conditions import evaluate_condition
from .expressions import evaluate_expression
from .scope import Scope, Scratch
from .statements import parse_statement, parse_statements

logger = logging.getLogger(__name__)

BANNER = "\n/* this file was generated by volk template utils, do not edit! */\n\n"
DEFAULT_MAX_DEPTH = 20

_FOR_RE = re.compile(r"\s*%\s*for\s+(\w+)\s+in\s+([\w.]+)\s*:")
_FOR_ENUM_RE = re.compile(r"\s*%\s*for\s+(\w+)\s*,\s*(\w+)\s+in\s+enumerate\((\w+)\)\s*:")
_FOR_TUPLE_RE = re.compile(r"\s*%\s*for\s+(\w+)\s*,\s*(\w+)\s+in\s+([\w.]+)\s*:")
_ENDFOR_RE = re.compile(r"\s*%\s*endfor")
_IF_RE = re.compile(r"\s*%\s*if\s+(.+?)\s*:")
_ELIF_RE = re.compile(r"\s*%\s*elif\s+(.+?)\s*:")
_ELSE_RE = re.compile(r"\s*%\s*else\s*:")
_ENDIF_RE = re.compile(r"\s*%\s*endif")
_INLINE_RE = re.compile(r"<%(.*?)%>")
_VARIABLE_RE = re.compile(r"\$\{([^}]+)\}")

# Loop variable prefixes that name a selected catalog entry in a collection path.
_COLLECTION_PREFIXES = {kinds.KERNEL: "kern", kinds.ARCH: "arch", kinds.MACHINE: "this_machine"}

# Kind of the element variable for each collection.
_ELEMENT_KINDS = {
    "kernels": kinds.KERNEL,
    "archs": kinds.ARCH,
    "machines": kinds.MACHINE,
    "this_machine.archs": kinds.ARCH,
    "arch.checks": kinds.CHECK,
}

_TUPLE_KINDS = {
    "kern.args": (kinds.ARG_TYPE, kinds.ARG_NAME),
    "arch.checks": (kinds.CHECK, kinds.PARAMS),
}


@dataclass
class _Loop:
    collection: str
    names: Tuple[str, ...]
    enumerate: bool = False
    active: bool = True
    depth: int = 1
    body: List[str] = field(default_factory=list)


@dataclass
class _Branch:
    parent_active: bool
    condition_met: bool = False
    in_else: bool = False

    @property
    def active(self) -> bool:
        return self.parent_active and self.condition_met and not self.in_else


def _lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _match_loop(line: str) -> Optional[_Loop]:
    match = _FOR_ENUM_RE.fullmatch(line)
    if match:
        return _Loop(match.group(3), (match.group(1), match.group(2)), enumerate=True)
    match = _FOR_TUPLE_RE.fullmatch(line)
    if match:
        return _Loop(match.group(3), (match.group(1), match.group(2)))
    match = _FOR_RE.fullmatch(line)
    if match:
        return _Loop(match.group(2), (match.group(1),))
    return None


class TemplateEngine:
    """Renders one template against the catalogs in ``context``.

    Loop bodies are rendered by child engines that inherit symbols, a
    derived scope and a copy of the scratch values; the scratch values are
    copied back once the body is done.
    """

    def __init__(
        self,
        context: PipelineContext,
        symbols: Optional[Mapping[str, str]] = None,
        scope: Optional[Scope] = None,
        scratch: Optional[Scratch] = None,
        depth: int = 0,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.context = context
        self._initial_symbols = dict(symbols or {})
        self._initial_scope = scope if scope is not None else Scope()
        self._initial_scratch = scratch if scratch is not None else Scratch()
        self.symbols: Dict[str, str] = dict(self._initial_symbols)
        self.scope = self._initial_scope
        self.scratch = self._initial_scratch.copy()
        self.depth = depth
        self.max_depth = max_depth
        self.args: Tuple[str, ...] = ()

        self._loops: List[_Loop] = []
        self._branches: List[_Branch] = []
        self._block: Optional[List[str]] = None
        self._block_active = True

    def render(self, template: str, args: Sequence[str] = ()) -> str:
        """Render ``template``; ``args`` are the caller's positional arguments.

        Every call starts from the symbols, scope and scratch the engine was
        created with.
        """
        self.args = tuple(args)
        self.symbols = dict(self._initial_symbols)
        self.scope = self._initial_scope
        self.scratch = self._initial_scratch.copy()
        self._loops = []
        self._branches = []
        self._block = None

        parts = [BANNER]
        for line in _lines(template):
            parts.append(self._process_line(line))

        if self._loops:
            logger.warning(f"Template ended inside {len(self._loops)} unclosed %for loop(s)")
        if self._branches:
            logger.warning(f"Template ended inside {len(self._branches)} unclosed %if block(s)")
        if self._block is not None:
            logger.warning("Template ended inside an unclosed <% block")
        return "".join(parts)

    # Expressions ----------------------------------------------------------

    def evaluate(self, expr: str) -> str:
        return evaluate_expression(expr, self.scope, self.scratch, self.symbols)

    def condition(self, cond: str) -> bool:
        return evaluate_condition(cond, self.evaluate)

    def execute(self, code: str) -> str:
        return parse_statement(code).execute(self)

    # Line processing ------------------------------------------------------

    @property
    def _active(self) -> bool:
        return not self._branches or self._branches[-1].active

    def _process_line(self, line: str) -> str:
        if self._loops:
            return self._collect(line)

        if self._block is not None:
            return self._continue_block(line)

        start = line.find("<%")
        if start != -1 and line.find("%>", start + 2) == -1:
            self._block = [line[start + 2:]]
            self._block_active = self._active
            return line[:start] if self._block_active else ""

        loop = _match_loop(line)
        if loop is not None:
            loop.active = self._active
            self._loops.append(loop)
            return ""

        if _ENDFOR_RE.fullmatch(line):
            logger.warning(f"Dropping %endfor without a matching %for: '{line.strip()}'")
            return ""

        if self._conditional(line):
            return ""

        if not self._active:
            return ""

        return self._substitute(line)

    def _collect(self, line: str) -> str:
        loop = self._loops[-1]
        if _match_loop(line) is not None:
            loop.depth += 1
        elif _ENDFOR_RE.fullmatch(line):
            loop.depth -= 1
            if loop.depth == 0:
                self._loops.pop()
                return self._run_loop(loop) if loop.active else ""
        loop.body.append(line)
        return ""

    def _continue_block(self, line: str) -> str:
        end = line.find("%>")
        if end == -1:
            self._block.append(line)
            return ""

        self._block.append(line[:end])
        block, self._block = "\n".join(self._block), None
        if not self._block_active:
            return ""
        return "".join(statement.execute(self) for statement in parse_statements(block))

    def _conditional(self, line: str) -> bool:
        match = _IF_RE.fullmatch(line)
        if match:
            branch = _Branch(parent_active=self._active)
            if branch.parent_active:
                branch.condition_met = self.condition(match.group(1))
            self._branches.append(branch)
            return True

        match = _ELIF_RE.fullmatch(line)
        if match and self._branches:
            branch = self._branches[-1]
            if not branch.condition_met:
                branch.condition_met = branch.parent_active and self.condition(match.group(1))
                branch.in_else = False
            else:
                branch.in_else = True
            return True

        if _ELSE_RE.fullmatch(line) and self._branches:
            branch = self._branches[-1]
            if not branch.condition_met:
                branch.condition_met = True
                branch.in_else = False
            else:
                branch.in_else = True
            return True

        if _ENDIF_RE.fullmatch(line):
            if self._branches:
                self._branches.pop()
            else:
                logger.warning(f"Dropping %endif without a matching %if: '{line.strip()}'")
            return True

        return False

    def _substitute(self, line: str) -> str:
        processed = self._rewrite(line, _INLINE_RE, self.execute, "Code block")
        processed = self._rewrite(processed, _VARIABLE_RE, self.evaluate, "Variable")
        if processed.startswith("##"):
            return ""
        return processed + "\n"

    @staticmethod
    def _rewrite(line: str, pattern: re.Pattern, replace, what: str) -> str:
        processed = line
        limit = len(line) + 100
        iterations = 0
        while True:
            match = pattern.search(processed)
            if match is None:
                break
            iterations += 1
            if iterations > limit:
                logger.error(f"{what} substitution exceeded {limit} iterations")
                break
            processed = processed[:match.start()] + replace(match.group(1)) + processed[match.end():]
        return processed

    # Loops ----------------------------------------------------------------

    def _collection_path(self, collection: str) -> str:
        head, dot, rest = collection.partition(".")
        prefix = _COLLECTION_PREFIXES.get(self.scope.alias_kind(head))
        if prefix is not None and dot:
            collection = prefix + dot + rest
        if collection == "machine.archs":
            collection = "this_machine.archs"
        return collection

    def _aliases(self, loop: _Loop, collection: str) -> Tuple[Tuple[str, str], ...]:
        if loop.enumerate:
            index_name, element_name = loop.names
            kind = _ELEMENT_KINDS.get(collection)
            aliases = ((index_name, kinds.INDEX),)
            return aliases + (((element_name, kind),) if kind else ())
        if len(loop.names) == 2:
            pair = _TUPLE_KINDS.get(collection)
            return tuple(zip(loop.names, pair)) if pair else ()
        kind = _ELEMENT_KINDS.get(collection)
        return ((loop.names[0], kind),) if kind else ()

    def _children(self, loop: _Loop, collection: str) -> Optional[List[Scope]]:
        """One child scope per element, or None when the collection is unavailable."""
        scope = self.scope
        aliases = self._aliases(loop, collection)

        def index(i: int) -> Dict[str, int]:
            return {"enum_index": i} if loop.enumerate else {}

        if collection == "kernels":
            return [scope.derive(aliases, kernel=k, **index(i)) for i, k in enumerate(self.context.kernels)]
        if collection == "archs":
            return [scope.derive(aliases, arch=a, **index(i)) for i, a in enumerate(self.context.archs)]
        if collection == "machines":
            return [scope.derive(aliases, machine=m, **index(i)) for i, m in enumerate(self.context.machines)]
        if collection == "this_machine.archs" and scope.machine is not None:
            return [scope.derive(aliases, arch=a) for a in scope.machine.archs]
        if collection == "kern.args" and scope.kernel is not None:
            return [scope.derive(aliases, arg_index=i) for i in range(len(scope.kernel.args))]
        if collection == "arch.checks" and scope.arch is not None:
            return [scope.derive(aliases, check_index=i) for i in range(len(scope.arch.checks))]
        return None

    def _run_loop(self, loop: _Loop) -> str:
        collection = self._collection_path(loop.collection)
        children = self._children(loop, collection)
        if children is None:
            logger.warning(f"Cannot iterate over '{loop.collection}' here, loop skipped")
            return ""

        body = "\n".join(loop.body) + "\n" if loop.body else ""
        return "".join(self._render_nested(body, child) for child in children)

    def _render_nested(self, body: str, scope: Scope) -> str:
        if self.depth >= self.max_depth:
            logger.error(f"Template render depth exceeded maximum ({self.max_depth})")
            return ""

        child = TemplateEngine(
            self.context,
            symbols=self.symbols,
            scope=scope,
            scratch=self.scratch.copy(),
            depth=self.depth + 1,
            max_depth=self.max_depth,
        )
        output = child.render(body, self.args)
        self.scratch.update_from(child.scratch)
        return output.removeprefix(BANNER)
