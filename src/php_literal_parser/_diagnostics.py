"""Plain-text rendering of errors against their source."""

from ._errors import Span

TAB_STOP = 4


def line_col(source: str, pos: int) -> tuple[int, int]:
    """Returns the 1-based line and column of character offset ``pos``."""
    pos = max(0, min(pos, len(source)))
    lineno = source.count("\n", 0, pos) + 1
    colno = pos - source.rfind("\n", 0, pos)
    return lineno, colno


def _expand(text: str) -> str:
    return text.expandtabs(TAB_STOP)


def render_error(message: str, span: Span | None, source: str) -> str:
    """
    Renders ``message`` under the source lines covered by ``span``.

    Output shape::

        2 |     "broken"
          |     ^^^^^^^^ Unexpected token, ...
    """
    if span is None:
        return message

    lines = source.split("\n")
    start_line, start_col = line_col(source, span.start)
    end_line, end_col = line_col(source, max(span.start, span.end - 1))
    gutter = len(str(end_line))
    out = []

    for lineno in range(start_line, end_line + 1):
        text = lines[lineno - 1] if lineno <= len(lines) else ""
        out.append(f"{lineno:>{gutter}} | {_expand(text)}".rstrip())

        first = start_col if lineno == start_line else 1
        last = end_col if lineno == end_line else max(len(text), first)
        prefix = _expand(text[: first - 1])
        marked = _expand(text[: last])[len(prefix) :]
        caret = "^" * max(1, len(marked))
        note = f" {message}" if lineno == end_line else ""
        out.append(f"{'':>{gutter}} | {' ' * len(prefix)}{caret}{note}")

    return "\n".join(out)


__all__ = ["line_col", "render_error"]
