"""
yaml-split: split a stream of kubernetes YAML documents into individual files

Each document is written to <output dir>/<kind>-<name>.yaml (lowercased, with
":" replaced by "-").

With a single argument the documents are read from stdin and the argument is
the output directory:

    kubectl kustomize overlays/prod | yaml-split manifests/

With two arguments the first is the input file ("-" for stdin) and the second
the output directory:

    yaml-split rendered.yaml manifests/
"""

import argparse
import logging
import sys

import yaml

from . import __version__
from .splitter import SplitError, read_input, split

logger = logging.getLogger(__name__)

PROG = "yaml-split"
LOG_FORMAT = PROG + ": %(levelname)s: %(message)s"

_loghandler = None


class Parser(argparse.ArgumentParser):
    def print_help(self, file=None):
        yaml_split_help = argparse.ArgumentParser.format_help(self).splitlines()
        self._print_message("\n".join(
            ["usage: {} [options] [input] output".format(PROG)] + yaml_split_help[1:] + [""]), file)


def get_parser():
    parser = Parser(prog=PROG, description=__doc__, allow_abbrev=False,
                    formatter_class=argparse.RawTextHelpFormatter)
    parser.add_argument("paths", nargs="+", metavar="path",
                        help="output directory, or input file followed by output directory")
    parser.add_argument("--debug", action="store_true", default=False,
                        help="Turn on debug logging.")
    parser.add_argument("-q", "--quiet", action="store_true", default=False,
                        help="Only log warnings and errors.")
    parser.add_argument("--dry-run", "--dryrun", dest="dry_run", action="store_true", default=False,
                        help="Parse the input and show the files that would be written.")
    parser.add_argument("--keep-lists", action="store_true", default=False,
                        help="Write 'kind: List' documents as a single file instead of one per item.")
    parser.add_argument("--version", action="version", version="%(prog)s {version}".format(version=__version__))
    return parser


def resolve_paths(parser, paths):
    """Return ``(input_path, output_dir)``; ``None`` input means stdin."""
    if len(paths) == 1:
        return None, paths[0]
    if len(paths) == 2:
        return paths[0], paths[1]
    parser.error("expected at most 2 paths, got {}".format(len(paths)))


def setup_logging(debug=False, quiet=False):
    level = logging.INFO
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    global _loghandler
    root = logging.getLogger()
    if _loghandler is not None:
        root.removeHandler(_loghandler)
    _loghandler = logging.StreamHandler(sys.stderr)
    _loghandler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_loghandler)
    root.setLevel(level)
    return _loghandler


def main(args=None):
    parser = get_parser()
    options = parser.parse_args(args=args)
    setup_logging(debug=options.debug, quiet=options.quiet)
    input_path, output_dir = resolve_paths(parser, options.paths)

    try:
        raw = read_input(input_path)
        written = split(raw, output_dir, unwrap_lists=not options.keep_lists,
                        dry_run=options.dry_run)
    except (OSError, yaml.YAMLError, SplitError) as e:
        logger.error("{}: {}".format(type(e).__name__, e))
        sys.exit(1)

    logger.debug("Wrote {} files to {}".format(len(written), output_dir))
    return 0


if __name__ == "__main__":
    main()
