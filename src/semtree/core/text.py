from semtree.core.ports.syntax import SyntaxNode

_ELLIPSIS = "..."


class TextResolver:
    """Slices the original source buffer by node byte span."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._cache: dict[tuple[int, int], str] = {}

    def text(self, node: SyntaxNode) -> str:
        span = (node.start_byte, node.end_byte)
        cached = self._cache.get(span)
        if cached is None:
            cached = self._source[span[0] : span[1]].decode("utf-8", errors="replace")
            self._cache[span] = cached
        return cached

    def preview(self, node: SyntaxNode, limit: int) -> str:
        """Display-only text: never use it for names or attribute markers."""
        return truncate(self.text(node), limit)


def truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    if limit <= len(_ELLIPSIS):
        return value[:limit]
    return value[: limit - len(_ELLIPSIS)] + _ELLIPSIS
