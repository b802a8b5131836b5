#!/usr/bin/env python3
"""
namechain CLI
=============
Command-line interface for training and sampling name chains.

Usage:
    namechain generate -n 10 --corpus nordic --order 3 --min 4
    namechain generate --source names.txt --atoms th,ch,sh --sanitize capitalize
    namechain stats --corpus roman --order 2
    namechain corpora
"""

import argparse
import json
import logging
import re
import sys

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from namechain import __version__
from namechain.corpus import get_corpus, list_corpora, load_corpus
from namechain.errors import ConfigurationError, NamechainError
from namechain.generator import NameGenerator
from namechain.output import SANITIZERS
from namechain.rng import RandomSource
from namechain.settings import get_setting

logger = logging.getLogger(__name__)

# =============================================================================
# Utilities
# =============================================================================

_ESCAPES = {'\\n': '\n', '\\t': '\t', '\\r': '\r', '\\\\': '\\'}


class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def error(self, msg: str):
        self.err_console.print(f"[bold red]Error:[/] {msg}")

    def result(self, text: str):
        """Essential output, printed even in quiet mode."""
        self.console.print(text, markup=False, soft_wrap=True)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return

        table = Table(title=title, box=box.SIMPLE_HEAD)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def unescape(value: str) -> str:
    """Turn shell-typed escapes like "\\n" into the characters they name."""
    if value is None:
        return None
    return re.sub(r'\\[ntr\\]', lambda m: _ESCAPES[m.group(0)], value)


def setup_logging(verbose: bool):
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_generator(args) -> NameGenerator:
    """Create and train a generator from parsed arguments."""
    options = {}
    for arg_name, option in (
        ('order', 'order'),
        ('min', 'atom_min'),
        ('max', 'atom_max'),
        ('rebranching', 'rebranching'),
    ):
        value = getattr(args, arg_name, None)
        if value is not None:
            options[option] = value

    source_splitter = unescape(getattr(args, 'source_splitter', None))
    sample_splitter = unescape(getattr(args, 'sample_splitter', None))
    if getattr(args, 'split_regex', False):
        try:
            source_splitter = re.compile(source_splitter) if source_splitter is not None else None
            sample_splitter = re.compile(sample_splitter) if sample_splitter is not None else None
        except re.error as e:
            raise ConfigurationError(f"Invalid splitter pattern: {e}") from e
    if source_splitter is not None:
        options['source_splitter'] = source_splitter
    if sample_splitter is not None:
        options['sample_splitter'] = sample_splitter

    if getattr(args, 'atoms', None):
        options['atom_list'] = [a.strip() for a in args.atoms.split(',') if a.strip()]
    if getattr(args, 'joint', None) is not None:
        options['sample_joint'] = unescape(args.joint)
    if getattr(args, 'append', None) is not None:
        options['sample_append'] = unescape(args.append)
    if getattr(args, 'sanitize', None):
        options['output_sanitizers'] = args.sanitize

    rng = RandomSource(getattr(args, 'seed', None))
    gen = NameGenerator(rng=rng, **options)

    if getattr(args, 'source', None):
        gen.add_samples(load_corpus(args.source))
    else:
        corpus_name = args.corpus or get_setting("cli.default_corpus", "fantasy")
        gen.add_samples(get_corpus(corpus_name))

    logger.debug("Trained %d samples, %d leaves", gen.sample_count, gen.graph.leaf_count)
    return gen


def add_training_args(p: argparse.ArgumentParser):
    src = p.add_mutually_exclusive_group()
    src.add_argument('--corpus', '-c', help='Built-in corpus name (see "corpora")')
    src.add_argument('--source', '-s', help='Corpus text file')
    p.add_argument('--order', '-o', type=int, help='Markov order')
    p.add_argument('--source-splitter', help='Splits the source into samples (default: newline)')
    p.add_argument('--sample-splitter', help='Splits a sample into atoms (default: characters)')
    p.add_argument('--split-regex', action='store_true', help='Treat splitters as regular expressions')
    p.add_argument('--atoms', '-a', help='Comma-separated multi-character atoms (e.g., th,ch,sh)')


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names."""
    gen = build_generator(args)
    count = args.count if args.count is not None else get_setting("cli.default_count", 10)

    names = gen.generate_batch(
        count,
        unique=not args.allow_duplicates,
        exclude_samples=args.exclude_samples,
        array_mode=args.array,
    )

    if args.json:
        out.result(json.dumps(names, ensure_ascii=False))
        return 0

    if not names:
        out.print("No names generated.")
        return 0

    if out.quiet:
        for name in names:
            out.result(' '.join(name) if args.array else name)
        return 0

    rows = []
    for i, name in enumerate(names, 1):
        if args.array:
            rows.append([i, ' | '.join(repr(a) for a in name), len(name)])
        else:
            rows.append([i, name, len(name)])
    out.table(['#', 'Atoms' if args.array else 'Name', 'Length'], rows)
    return 0


def cmd_stats(args, out: Output):
    """Show statistics of a trained graph."""
    gen = build_generator(args)
    graph = gen.graph
    atoms = graph.atoms()

    stats = {
        'order': graph.order,
        'samples': gen.sample_count,
        'leaves': graph.leaf_count,
        'transitions': graph.transition_count,
        'atoms': len(atoms),
    }

    if args.json:
        out.result(json.dumps(stats))
        return 0

    out.table(['Metric', 'Value'], list(stats.items()), title='Transition graph')
    if args.verbose_atoms:
        out.print(' '.join(atoms), markup=False)
    return 0


def cmd_corpora(args, out: Output):
    """List built-in corpora."""
    corpora = list_corpora()
    if args.json:
        out.result(json.dumps(corpora))
        return 0
    out.table(['Corpus', 'Samples'], list(corpora.items()))
    return 0


COMMANDS = {
    'generate': cmd_generate,
    'gen': cmd_generate,
    'g': cmd_generate,
    'stats': cmd_stats,
    'corpora': cmd_corpora,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='namechain',
        description='namechain - Markov Chain Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 10 --corpus nordic --order 3 --min 4
  %(prog)s generate --source names.txt --sanitize capitalize --exclude-samples
  %(prog)s generate --corpus roman --order 4 --min 5 --rebranching 3
  %(prog)s stats --corpus fantasy
  %(prog)s corpora
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging on stderr')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('-n', '--count', type=int, help='Number of names (default: 10)')
    add_training_args(p)
    p.add_argument('--min', type=int, help='Minimum number of atoms')
    p.add_argument('--max', type=int, help='Maximum number of atoms')
    p.add_argument('--rebranching', '-r', type=int, help='Rebranch attempts per name (0 disables)')
    p.add_argument('--joint', help='String placed between atoms')
    p.add_argument('--append', help='String appended to every name')
    p.add_argument('--sanitize', action='append', choices=sorted(SANITIZERS),
                   help='Output sanitizer (repeatable, applied in order)')
    p.add_argument('--seed', type=int, help='Random seed for reproducible output')
    p.add_argument('--exclude-samples', '-x', action='store_true',
                   help='Drop names identical to a training sample')
    p.add_argument('--allow-duplicates', action='store_true', help='Keep repeated names')
    p.add_argument('--array', action='store_true', help='Output atoms instead of joined names')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- stats ---
    p = subparsers.add_parser('stats', help='Show transition graph statistics')
    add_training_args(p)
    p.add_argument('--show-atoms', dest='verbose_atoms', action='store_true',
                   help='List the distinct atoms')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- corpora ---
    p = subparsers.add_parser('corpora', help='List built-in corpora')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)
    out = Output(quiet=args.quiet)

    try:
        return COMMANDS[args.command](args, out)
    except NamechainError as e:
        out.error(str(e))
        return 1
    except KeyboardInterrupt:
        out.error("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
