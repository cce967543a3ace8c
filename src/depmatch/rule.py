from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from depmatch.matchers import DependencyMatcher, TriggerMatcher
from depmatch.pattern.parser import DEFAULT_TRIGGER_FIELD, compile_fields
from depmatch.sentence import Sentence


class MatcherOptions(NamedTuple):
    trigger_field: str = DEFAULT_TRIGGER_FIELD
    require_all_roles: bool = False


class DependencyRule:
    """A compiled pattern: a trigger word plus one path matcher per role.

    Pattern text holds one ``name: expression`` field per line, e.g.::

        trigger: gave
        subject: nsubj
        object: dobj

    Every occurrence of the trigger word in a sentence is a candidate match;
    each role's path is walked from it and the roles that reach exactly one
    token are bound.
    """

    def __init__(self, pattern: str, options: Optional[MatcherOptions] = None):
        if options is None:
            options = MatcherOptions()

        trigger, arguments = compile_fields(pattern, trigger_field=options.trigger_field)

        self._pattern = pattern
        self._options = options
        self._trigger = TriggerMatcher(trigger)
        self._arguments = MappingProxyType(dict(arguments))

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def options(self) -> MatcherOptions:
        return self._options

    @property
    def trigger(self) -> TriggerMatcher:
        return self._trigger

    @property
    def arguments(self) -> Mapping[str, DependencyMatcher]:
        return self._arguments

    def match_at(self, sentence: Sentence, i: int, verbose=False) -> Optional[Dict[str, int]]:
        bindings = {}

        for name, matcher in self._arguments.items():
            j = matcher.find_from(sentence, i)
            if verbose:
                print('\trole %s (%s) -> %s' % (name, matcher.to_expression(), 'no match' if j is None else j))
            if j is not None:
                bindings[name] = j

        if not bindings:
            return None

        if self._options.require_all_roles and len(bindings) != len(self._arguments):
            return None

        return bindings

    def iter_matches(self, sentence: Sentence, verbose=False) -> Iterator[Tuple[int, Dict[str, int]]]:
        for i in self._trigger.find_all_in(sentence):
            if verbose:
                print('trigger %r found at %d' % (self._trigger.word, i))

            bindings = self.match_at(sentence, i, verbose=verbose)

            if bindings is None:
                if verbose: print('\tdropping trigger at %d' % i)
                continue

            yield i, bindings

    def find_all_matches(self, sentence: Sentence, verbose=False) -> List[Dict[str, int]]:
        return [bindings for _, bindings in self.iter_matches(sentence, verbose=verbose)]

    def to_pattern(self) -> str:
        """Render the rule back to pattern text.

        The trigger line uses ``options.trigger_field``, so a rule compiled
        with a custom trigger field must be recompiled with the same options,
        e.g. ``compile_pattern(rule.to_pattern(), rule.options)``.
        """
        lines = ['%s: %s' % (self._options.trigger_field, self._trigger.word)]
        for name, matcher in self._arguments.items():
            lines.append('%s: %s' % (name, matcher.to_expression()))
        return '\n'.join(lines) + '\n'

    def __eq__(self, other):
        if not isinstance(other, DependencyRule):
            return NotImplemented
        return self._trigger == other._trigger and dict(self._arguments) == dict(other._arguments)

    def __hash__(self):
        return hash((self._trigger, tuple(sorted(self._arguments.items()))))

    def __repr__(self):
        return 'DependencyRule(%r)' % self.to_pattern()


def compile_pattern(pattern: str, options: Optional[MatcherOptions] = None) -> DependencyRule:
    return DependencyRule(pattern, options=options)


__all__ = ['MatcherOptions', 'DependencyRule', 'compile_pattern']
