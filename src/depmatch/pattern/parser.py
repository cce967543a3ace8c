import re
from typing import Dict, List, NamedTuple, Tuple

import lark
from lark import Lark
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from lark.visitors import Transformer

from depmatch.errors import ParseError
from depmatch.matchers import (DependencyMatcher, Direction, ExactLabelMatcher, HopMatcher, LabelMatcher,
                               PathMatcher, RegexLabelMatcher)
from depmatch.pattern.grammar import GRAMMAR

PATTERN_PARSER = Lark(GRAMMAR, start='start_pattern', parser='lalr', lexer='contextual', debug=False)

DEFAULT_TRIGGER_FIELD = 'trigger'


class PatternField(NamedTuple):
    name: str
    expression: str
    line: int
    column: int


class PatternTransformer(Transformer):
    def start_pattern(self, tree):
        return list(tree)

    def field(self, tree):
        name: lark.Token = tree[0]
        value: lark.Token = tree[1]
        expression = value.value.strip()
        leading = len(value.value) - len(value.value.lstrip())
        return PatternField(name.value, expression, value.line, value.column + leading)


class PathExpressionParser:
    """Recursive-descent parser for path expressions such as ``nsubj >amod``.

    ``path := hop hop*``; a hop is an optional ``>`` (outgoing, the default)
    or a mandatory ``<`` (incoming) followed by either a bare word, matched
    exactly, or a ``/regex/``, searched anywhere in the label.
    """

    WORD = re.compile(r'\w+')
    WHITESPACE = re.compile(r'\s*')

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message, pos=None) -> ParseError:
        return ParseError(message, self.text, self.pos if pos is None else pos)

    def at_end(self):
        return self.pos >= len(self.text)

    def peek(self):
        if self.at_end():
            return ''
        return self.text[self.pos]

    def skip_whitespace(self):
        self.pos = self.WHITESPACE.match(self.text, self.pos).end()

    def parse(self) -> DependencyMatcher:
        self.skip_whitespace()
        if self.at_end():
            raise self.error('empty path expression')

        matcher = self.path()

        self.skip_whitespace()
        if not self.at_end():
            raise self.error('unexpected %r' % self.peek())

        return matcher

    def path(self) -> DependencyMatcher:
        matcher = self.hop()
        self.skip_whitespace()

        while self.starts_hop():
            matcher = PathMatcher(matcher, self.hop())
            self.skip_whitespace()

        return matcher

    def starts_hop(self):
        return self.peek() in ('<', '>', '/') or self.WORD.match(self.text, self.pos) is not None

    def hop(self) -> HopMatcher:
        self.skip_whitespace()

        if self.peek() == '<':
            self.pos += 1
            direction = Direction.INCOMING
        else:
            if self.peek() == '>':
                self.pos += 1
            direction = Direction.OUTGOING

        return HopMatcher(self.name_matcher(), direction)

    def name_matcher(self) -> LabelMatcher:
        self.skip_whitespace()

        if self.peek() == '/':
            return self.regex_matcher()

        match = self.WORD.match(self.text, self.pos)
        if match is None:
            found = 'end of expression' if self.at_end() else repr(self.peek())
            raise self.error('expected dependency label but %s found' % found)

        self.pos = match.end()
        return ExactLabelMatcher(match.group())

    def regex_matcher(self) -> RegexLabelMatcher:
        start = self.pos
        i = start + 1

        while i < len(self.text):
            c = self.text[i]
            if c == '\\':
                # Escaped character, including an escaped slash.
                i += 2
                continue
            if c == '/':
                break
            if c in '\r\n':
                raise self.error('line break inside regex', i)
            i += 1
        else:
            raise self.error('unterminated regex', start)

        body = self.text[start + 1:i]

        try:
            pattern = re.compile(body)
        except re.error as e:
            raise self.error('invalid regex /%s/: %s' % (body, e), start) from e

        self.pos = i + 1
        return RegexLabelMatcher(pattern)


def parse_path(expression: str) -> DependencyMatcher:
    return PathExpressionParser(expression).parse()


def _describe(e: UnexpectedInput, text: str):
    if isinstance(e, UnexpectedCharacters):
        return 'unexpected character %r' % text[e.pos_in_stream]
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return 'unexpected end of pattern'
        return 'unexpected %r' % e.token.value
    return 'malformed pattern'


def parse_pattern_fields(text: str) -> List[PatternField]:
    """Split pattern text into ``name: expression`` fields, one per line."""
    try:
        parse_tree = PATTERN_PARSER.parse(text)
    except UnexpectedInput as e:
        raise ParseError(_describe(e, text) + ', expected "name: expression"', text,
                         e.pos_in_stream, line=e.line, column=e.column) from e
    return PatternTransformer().transform(parse_tree)


def compile_fields(text: str, trigger_field: str = DEFAULT_TRIGGER_FIELD) -> Tuple[str, Dict[str, DependencyMatcher]]:
    trigger = None
    arguments = {}

    for field in parse_pattern_fields(text):
        if field.name == trigger_field:
            # Only the first trigger field counts.
            if trigger is None:
                if not field.expression:
                    raise ParseError('empty trigger', text, line=field.line, column=field.column)
                trigger = field.expression
            continue

        if field.name in arguments:
            raise ParseError('duplicate role %r' % field.name, text, line=field.line, column=field.column)

        try:
            arguments[field.name] = parse_path(field.expression)
        except ParseError as e:
            raise ParseError('%s in role %r' % (e.message, field.name), e.text, e.position,
                             line=field.line, column=field.column + (e.position or 0)) from e

    if trigger is None:
        raise ParseError('missing %r field' % trigger_field, text)

    return trigger, arguments


__all__ = ['PATTERN_PARSER', 'PatternField', 'PatternTransformer', 'PathExpressionParser',
           'parse_path', 'parse_pattern_fields', 'compile_fields', 'DEFAULT_TRIGGER_FIELD']
