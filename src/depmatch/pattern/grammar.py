

GRAMMAR = r"""

start_pattern: _NL? _line*
_line: field _NL?
field: FIELD_NAME ":" EXPRESSION

FIELD_NAME: /\w+/
EXPRESSION: /[^\n]+/

COMMENT: /#[^\n]*/
_NL: (/\r?\n[\t ]*/ | COMMENT)+

%ignore WHITESPACE_INLINE
WHITESPACE_INLINE: (" " | "\t")+
"""
