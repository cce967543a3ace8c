from typing import Optional


class ParseError(ValueError):
    """Raised when pattern text cannot be compiled.

    ``position`` is an offset into ``text``; ``line`` and ``column`` are
    1-based and only set for errors found while splitting a pattern block.
    """

    def __init__(self, message: str, text: str, position: Optional[int] = None,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.text = text
        self.position = position
        self.line = line
        self.column = column
        super().__init__(self._format())

    @property
    def fragment(self) -> str:
        if self.position is None or self.position < 0:
            return self.text
        return self.text[self.position:self.position + 20]

    def _format(self):
        if self.line is not None and self.line > 0:
            where = 'line %d, column %d' % (self.line, self.column)
        elif self.position is not None and self.position >= 0:
            where = 'position %d' % self.position
        else:
            where = 'end of input'
        return '%s at %s in %r (near %r)' % (self.message, where, self.text, self.fragment)


class PreconditionError(RuntimeError):
    """Raised when a sentence lacks the dependency graph a matcher needs."""


__all__ = ['ParseError', 'PreconditionError']
