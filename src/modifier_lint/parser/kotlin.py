"""Kotlin modifier-chain extractor.

Finds ``Modifier.a().b { }.c(...)`` and ``modifier.a()...`` chains in
Kotlin source without a full parser:

1. comments and string literals are blanked out (newlines kept, so offsets
   and line numbers stay valid);
2. every ``Modifier`` / ``modifier`` receiver is located on the blanked text;
3. ``.name``, ``.name(...)``, ``.name { }`` segments are consumed while the
   next non-blank character is a ``.``, balancing nested brackets.

Chains nested inside the arguments or lambdas of another chain are found
independently by step 2.
"""

from __future__ import annotations

import bisect
import re

from modifier_lint.model.chain import ModifierCall, ModifierChain, collapse_snippet

_RECEIVER_RE = re.compile(r"(?<![\w.$])(Modifier|modifier)(?![\w$])")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# `fun Modifier.ext()` / `val Modifier.ext` declare extensions, not chains.
_DECL_BEFORE_RE = re.compile(r"\b(fun|val|var)\s+(<[^>]*>\s*)?$")
_IGNORE_RE = re.compile(r"modifier-lint:\s*ignore\b")
_DISABLE_RE = re.compile(r"modifier-lint:\s*disable=([A-Z0-9_,\s]+)")

_SKIP_SEGMENTS = frozenset({"Companion"})
_CHAR_LITERAL_MAX = 10


# ── masking ─────────────────────────────────────────────────────────


def _block_comment_end(src: str, i: int) -> int:
    """Index just past a (possibly nested) ``/* */`` comment starting at *i*."""
    depth = 0
    n = len(src)
    while i < n:
        if src.startswith("/*", i):
            depth += 1
            i += 2
        elif src.startswith("*/", i):
            depth -= 1
            i += 2
            if depth == 0:
                return i
        else:
            i += 1
    return n


def _template_end(src: str, i: int) -> int:
    """Index just past the ``}`` closing a ``${`` template whose body starts at *i*."""
    depth = 1
    n = len(src)
    while i < n:
        c = src[i]
        if src.startswith('"""', i):
            i = _string_end(src, i + 3, raw=True)
            continue
        if c == '"':
            i = _string_end(src, i + 1, raw=False)
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def _string_end(src: str, i: int, *, raw: bool) -> int:
    """Index just past the string whose body starts at *i*."""
    n = len(src)
    while i < n:
        if raw and src.startswith('"""', i):
            end = i + 3
            while end < n and src[end] == '"':
                end += 1
            return end
        c = src[i]
        if src.startswith("${", i):
            i = _template_end(src, i + 2)
            continue
        if not raw:
            if c == "\\":
                i += 2
                continue
            if c == '"':
                return i + 1
            if c == "\n":
                # unterminated literal; stop at end of line
                return i
        i += 1
    return n


def _char_end(src: str, i: int) -> int | None:
    """Index just past a char literal starting at *i*, or None if not one."""
    j = i + 1
    if j < len(src) and src[j] == "\\":
        j += 2
    end = src.find("'", j)
    if end == -1 or end - i > _CHAR_LITERAL_MAX or "\n" in src[i:end]:
        return None
    return end + 1


def mask_source(src: str) -> tuple[str, list[tuple[int, str]]]:
    """Blank out comments and literals.

    Returns the masked text (same length as *src*) and the list of
    ``(offset, text)`` comments found.
    """
    out = list(src)
    comments: list[tuple[int, str]] = []
    n = len(src)

    def blank(a: int, b: int) -> None:
        for k in range(a, b):
            if out[k] != "\n":
                out[k] = " "

    i = 0
    while i < n:
        c = src[i]
        if src.startswith("//", i):
            end = src.find("\n", i)
            end = n if end == -1 else end
            comments.append((i, src[i:end]))
            blank(i, end)
            i = end
        elif src.startswith("/*", i):
            end = _block_comment_end(src, i)
            comments.append((i, src[i:end]))
            blank(i, end)
            i = end
        elif src.startswith('"""', i):
            end = _string_end(src, i + 3, raw=True)
            blank(i, end)
            i = end
        elif c == '"':
            end = _string_end(src, i + 1, raw=False)
            blank(i, end)
            i = end
        elif c == "'":
            end = _char_end(src, i)
            if end is None:
                i += 1
            else:
                blank(i, end)
                i = end
        else:
            i += 1
    return "".join(out), comments


# ── chain scanning ──────────────────────────────────────────────────


def _skip_balanced(text: str, i: int, open_ch: str, close_ch: str) -> int:
    """*i* points at *open_ch*; return the index just past its partner."""
    depth = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == open_ch:
            depth += 1
        elif c == close_ch:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def _skip_ws(text: str, i: int, *, newlines: bool) -> int:
    n = len(text)
    allowed = " \t\r\n" if newlines else " \t"
    while i < n and text[i] in allowed:
        i += 1
    return i


class _LineIndex:
    def __init__(self, src: str) -> None:
        self._starts = [0] + [m.end() for m in re.finditer("\n", src)]

    def line(self, offset: int) -> int:
        return bisect.bisect_right(self._starts, offset)

    def column(self, offset: int) -> int:
        return offset - self._starts[self.line(offset) - 1] + 1


def _scan_segments(
    masked: str, start: int, lines: _LineIndex
) -> tuple[list[ModifierCall], int]:
    """Consume ``.name(...)`` segments from *start*; return calls and end offset."""
    calls: list[ModifierCall] = []
    end = start
    i = start
    while True:
        j = _skip_ws(masked, i, newlines=True)
        if j >= len(masked) or masked[j] != "." or masked.startswith("..", j):
            break
        k = _skip_ws(masked, j + 1, newlines=True)
        m = _IDENT_RE.match(masked, k)
        if m is None:
            break
        name = m.group(0)
        if not calls and name[0].isupper() and name not in _SKIP_SEGMENTS:
            # Modifier.Node / Modifier.Element: a type reference.
            return [], start
        i = m.end()
        p = _skip_ws(masked, i, newlines=False)
        if p < len(masked) and masked[p] == "<":
            close = masked.find(">", p)
            if close != -1 and "\n" not in masked[p:close]:
                i = close + 1
                p = _skip_ws(masked, i, newlines=False)
        if p < len(masked) and masked[p] == "(":
            i = _skip_balanced(masked, p, "(", ")")
            p = _skip_ws(masked, i, newlines=False)
        if p < len(masked) and masked[p] == "{":
            i = _skip_balanced(masked, p, "{", "}")
        if name not in _SKIP_SEGMENTS:
            calls.append(
                ModifierCall(name=name, line=lines.line(m.start()), column=lines.column(m.start()))
            )
        end = i
    return calls, end


def _suppression(
    comments_by_line: dict[int, list[str]], line: int
) -> tuple[bool, frozenset[str]]:
    ignore = False
    disabled: set[str] = set()
    for ln in (line - 1, line):
        for text in comments_by_line.get(ln, ()):
            if _IGNORE_RE.search(text):
                ignore = True
            m = _DISABLE_RE.search(text)
            if m:
                disabled.update(p.strip() for p in m.group(1).split(",") if p.strip())
    return ignore, frozenset(disabled)


def _strip_comments(src: str, comments: list[tuple[int, str]]) -> str:
    """*src* with comment text blanked; literals are kept for snippets."""
    out = list(src)
    for offset, text in comments:
        for k in range(offset, offset + len(text)):
            if out[k] != "\n":
                out[k] = " "
    return "".join(out)


def extract_chains(source: str) -> list[ModifierChain]:
    """Return every modifier chain in *source*, in source order."""
    masked, comments = mask_source(source)
    uncommented = _strip_comments(source, comments)
    lines = _LineIndex(source)

    comments_by_line: dict[int, list[str]] = {}
    for offset, text in comments:
        comments_by_line.setdefault(lines.line(offset), []).append(text)

    chains: list[ModifierChain] = []
    for m in _RECEIVER_RE.finditer(masked):
        head = masked[max(0, m.start() - 80) : m.start()]
        if _DECL_BEFORE_RE.search(head):
            continue
        calls, end = _scan_segments(masked, m.end(), lines)
        if not calls:
            continue
        line_start = lines.line(m.start())
        ignore, disabled = _suppression(comments_by_line, line_start)
        if ignore:
            continue
        chains.append(
            ModifierChain(
                receiver=m.group(1),
                calls=tuple(calls),
                line_start=line_start,
                line_end=lines.line(max(m.start(), end - 1)),
                text=collapse_snippet(uncommented[m.start() : end]),
                disabled_rules=disabled,
            )
        )
    return chains


def parse_chain_expression(expr: str) -> list[str]:
    """Parse a single chain expression or a bare list of names.

    ``"Modifier.padding(8.dp).clickable { }"`` and ``"padding clickable"``
    both yield ``["padding", "clickable"]``.
    """
    stripped = expr.strip()
    if not stripped:
        return []
    if "." not in stripped and "(" not in stripped and "{" not in stripped:
        return [t for t in re.split(r"[\s,]+", stripped) if t]
    if not _RECEIVER_RE.match(stripped):
        stripped = "Modifier." + stripped.lstrip(".")
    chains = extract_chains(stripped)
    return chains[0].names if chains else []
