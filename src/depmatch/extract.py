import argparse
import collections.abc
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from depmatch.rule import DependencyRule, MatcherOptions
from depmatch.sentence import Sentence
from depmatch.util import get_nlp, sentence_from_span, split_sentences

PATTERN_SUFFIX = '.pattern'


@dataclass
class RuleMatchFlattened:
    rule: str = ''
    sentence: str = ''
    trigger: str = ''
    trigger_index: int = -1
    role: str = ''
    index: int = -1
    word: str = ''


@dataclass
class RuleMatch:
    rule: str
    sentence: Sentence
    trigger_index: int
    bindings: Dict[str, int] = field(default_factory=dict)

    def flatten(self) -> List[RuleMatchFlattened]:
        words = self.sentence.words
        return [
            RuleMatchFlattened(rule=self.rule, sentence=self.sentence.text,
                               trigger=words[self.trigger_index], trigger_index=self.trigger_index,
                               role=role, index=i, word=words[i])
            for role, i in self.bindings.items()
        ]

    def __str__(self):
        words = self.sentence.words
        args = ', '.join('%s=%s' % (role, words[i]) for role, i in self.bindings.items())
        return '%s(%s: %s)' % (self.rule, words[self.trigger_index], args)


def load_pattern(filepath, options: Optional[MatcherOptions] = None, verbose=False) -> DependencyRule:
    if verbose:
        print('Parsing: %s' % filepath)
    with open(filepath, 'r', encoding='utf-8') as f:
        data = f.read()
    return DependencyRule(data, options=options)


def load_patterns(path, options: Optional[MatcherOptions] = None, verbose=False) -> Dict[str, DependencyRule]:
    """Load one ``.pattern`` file, or every ``.pattern`` file under a directory.

    Rules are keyed by file stem.
    """
    rules = {}

    if os.path.isfile(path):
        rules[Path(path).stem] = load_pattern(path, options=options, verbose=verbose)
    elif os.path.isdir(path):
        for dirpath, dirnames, filenames in os.walk(path):
            dirnames.sort()
            for fn in sorted(filenames):
                if not fn.endswith(PATTERN_SUFFIX):
                    continue
                name = Path(fn).stem
                if name in rules:
                    raise ValueError('duplicate pattern name %r in %s' % (name, dirpath))
                rules[name] = load_pattern(os.path.join(dirpath, fn), options=options, verbose=verbose)
    else:
        raise FileNotFoundError(path)

    return rules


def extract_one(sentence: Sentence, rules: Dict[str, DependencyRule], verbose: bool = False) -> List[RuleMatch]:
    matches = []

    for name, rule in rules.items():
        if verbose:
            print('applying rule %s to: %s' % (name, sentence.text))

        for i, bindings in rule.iter_matches(sentence, verbose=verbose):
            matches.append(RuleMatch(rule=name, sentence=sentence, trigger_index=i, bindings=bindings))

    return matches


def extract(input_object: Union[str, Iterable[str]], rules: Dict[str, DependencyRule],
            verbose: bool = False,
            want_dataframe: bool = False) -> Union[List[RuleMatchFlattened], pd.DataFrame]:
    output_matches = []

    if type(input_object) == str:
        input_object = [input_object, ]
    elif not isinstance(input_object, collections.abc.Iterable):
        raise ValueError('extract: input should be a string or a collection of strings')

    nlp = get_nlp()

    for text in input_object:
        for span in split_sentences(nlp(text)):
            sentence = sentence_from_span(span)
            for match in extract_one(sentence, rules, verbose=verbose):
                output_matches.extend(match.flatten())

    if want_dataframe:
        return pd.DataFrame([m.__dict__ for m in output_matches], columns=list(RuleMatchFlattened.__annotations__))

    return output_matches


def main(argv=None):
    parser = argparse.ArgumentParser(description='depmatch')
    parser.add_argument('--input', type=str,
                        help='an input string')
    parser.add_argument('--input-file', type=str,
                        help='The filepath of a input csv file')
    parser.add_argument('--patterns', type=str, required=True,
                        help='A .pattern file or a directory containing .pattern files.')
    parser.add_argument('--output', metavar='output', type=str,
                        help='an output path', required=True)
    parser.add_argument('--data-column', type=str, default=None, metavar='data_col',
                        help='what column to use if a csv is given', dest='data_column')
    parser.add_argument('--id-column', type=str, default=None, metavar='id_col',
                        help='what column to use if a csv is given', dest='id_column')
    parser.add_argument('--file-delimiter', default='comma', const='comma', nargs='?',
                        choices=['comma', 'pipe', 'tab'],
                        help='delimiter character for data file (default: %(default)s)')
    parser.add_argument('--strict', action='store_true',
                        help='only keep matches where every role is bound')
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args(argv)
    is_file = args.input_file is not None

    delimiter = {'comma': ',', 'pipe': '|', 'tab': '\t'}[args.file_delimiter]

    df = None

    if not args.input and not args.input_file:
        exit('Please provide either an input string or an input file')

    options = MatcherOptions(require_all_roles=args.strict)
    rules = load_patterns(args.patterns, options=options, verbose=args.verbose)

    if is_file:
        if args.verbose:
            print('Loading input (%s) as a CSV file...' % args.input_file)
            print('delimiter:', args.file_delimiter)
        if args.data_column is None:
            exit('Invalid arguments: Must specify column name for data using --data-column')

        usecols = [args.data_column, ]

        if args.id_column is not None:
            usecols.append(args.id_column)

        df = pd.read_csv(args.input_file, index_col=args.id_column, usecols=usecols, delimiter=delimiter)
        input_values = df[args.data_column]
    else:
        input_values = [args.input, ]

    with open(args.output, 'w+'):
        pass

    match_count = 0
    header = True

    for i, data_str in enumerate(input_values):
        matches_df = extract(data_str, rules, verbose=args.verbose, want_dataframe=True)
        match_count += len(matches_df)
        if df is not None:
            matches_df['sentence_id'] = df.index[i]
        matches_df.to_csv(args.output, mode='a', sep=delimiter, header=header, index=False)

        if header:
            header = False

    if args.verbose:
        print('Number of role bindings: %d' % match_count)


if __name__ == '__main__':
    main()


__all__ = ['RuleMatch', 'RuleMatchFlattened', 'load_pattern', 'load_patterns', 'extract_one', 'extract', 'main']
