"""CLI interface for bundle-redactor — called once per bundle by the collection tooling.

Usage:
    # Redact file contents (stdin: text, stdout: redacted text)
    cat must-gather/etcd.log | \
        python -m bundle_redactor.cli --replacement-type consistent contents

    # Redact path strings (one redacted path per line on stdout)
    python -m bundle_redactor.cli path pods/etcd-ip-10-0-187-218.ec2.internal/current.log

    # Use a YAML config and write the audit report
    python -m bundle_redactor.cli --config redact.yaml --report report.yaml contents < in.txt

All state lives for one invocation: every input of the run shares one
numbering sequence, and the report covers exactly that run.
"""

from __future__ import annotations
import argparse
import logging
import sys

from .chain import ObfuscatorChain
from .config import create_chain, load_config, load_from_yaml
from .errors import ConfigurationError
from .report import dump_report

logger = logging.getLogger(__name__)


def _build_chain(args: argparse.Namespace) -> ObfuscatorChain:
    if args.config:
        return create_chain(load_from_yaml(args.config))

    entries = []
    for otype in filter(None, (t.strip() for t in args.types.split(","))):
        entry = {"type": otype, "replacement_type": args.replacement_type}
        if otype == "domain":
            entry["domains"] = [d for d in args.domains.split(",") if d]
        elif otype == "keyword":
            entry["replacements"] = [k for k in args.keywords.split(",") if k]
        entries.append(entry)
    return create_chain(load_config({"obfuscate": entries}))


def _finish(chain: ObfuscatorChain, args: argparse.Namespace) -> None:
    if args.report:
        dump_report(chain.report(), args.report)
        logger.info("wrote %d report entries to %s", len(chain.report()), args.report)


def cmd_contents(chain: ObfuscatorChain, args: argparse.Namespace) -> None:
    """Redact text on stdin."""
    sys.stdout.write(chain.contents(sys.stdin.read()))


def cmd_path(chain: ObfuscatorChain, args: argparse.Namespace) -> None:
    """Redact each path argument."""
    for path in args.paths:
        sys.stdout.write(chain.path(path) + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bundle-redactor",
        description="Redact network identities from diagnostic bundles",
    )
    parser.add_argument("--config", help="YAML config file (overrides --types/--replacement-type)")
    parser.add_argument("--types", default="ip", help="Comma-separated obfuscators: ip,mac,domain,keyword")
    parser.add_argument("--replacement-type", default="static", help="static or consistent")
    parser.add_argument("--domains", default="", help="Comma-separated domains for the domain obfuscator")
    parser.add_argument("--keywords", default="", help="Comma-separated keywords for the keyword obfuscator")
    parser.add_argument("--report", help="Write the replacement report (YAML) to this path")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("contents", help="Redact text (stdin)")
    p_path = sub.add_parser("path", help="Redact path strings")
    p_path.add_argument("paths", nargs="+")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        chain = _build_chain(args)
    except (ConfigurationError, OSError) as e:
        sys.stderr.write(f"bundle-redactor: {e}\n")
        return 2

    cmds = {
        "contents": cmd_contents,
        "path": cmd_path,
    }
    cmds[args.command](chain, args)
    try:
        _finish(chain, args)
    except OSError as e:
        sys.stderr.write(f"bundle-redactor: cannot write report: {e}\n")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
