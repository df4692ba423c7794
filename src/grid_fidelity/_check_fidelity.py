import argparse
import json
import logging
import sys
from dataclasses import replace

from grid_fidelity import _get_version
from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.builder import build_reference_document
from grid_fidelity.checker import check
from grid_fidelity.codecs import codec_for, csv_row_events
from grid_fidelity.constants import PROFILE_PLAIN_TEXT
from grid_fidelity.exceptions import FidelityError, StreamError
from grid_fidelity.profiles import PROFILES, FidelityProfile
from grid_fidelity.streaming import check_stream, iter_row_events

logger = logging.getLogger(grid_fidelity_name)


def command_line_parser():
    parser = argparse.ArgumentParser(
        description="Build the reference spreadsheet document, encode it and check what survives"
    )
    parser.add_argument("-V", "--version", action="store_true")
    parser.add_argument(
        "-p",
        "--profile",
        action="append",
        choices=list(PROFILES),
        help="Fidelity profile(s) to check (default: all profiles)",
    )
    parser.add_argument(
        "--no-styles",
        action="store_true",
        default=False,
        help="Don't check number formats, fonts, borders, fills, alignments or row heights",
    )
    parser.add_argument(
        "--no-bad-alignments",
        action="store_true",
        default=False,
        help="Build the document without the row of invalid alignments",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        default=False,
        help="Check the decoded document as a stream of row events",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        default=False,
        help="Print each encoded document before checking it",
    )
    parser.add_argument(
        "--debug", default=False, action="store_true", help="Enable debug logging"
    )
    return parser


def profile_from_args(args, profile_name: str) -> FidelityProfile:
    profile = FidelityProfile.named(profile_name, use_styles=not args.no_styles)
    if args.no_bad_alignments:
        profile = replace(profile, supports_bad_alignment_rejection=False)
    return profile


def print_encoded(profile_name: str, data):
    if not isinstance(data, str):
        data = json.dumps(data, indent=2, default=str)
    print(f"{profile_name}:")
    print(data)


def check_profile(args, profile_name: str):
    profile = profile_from_args(args, profile_name)
    doc = build_reference_document(include_bad_alignments=not args.no_bad_alignments)
    codec = codec_for(profile_name)
    data = codec.dumps(doc)
    if args.dump:
        print_encoded(profile_name, data)

    if not args.stream:
        check(codec.loads(data), profile)
    elif profile_name == PROFILE_PLAIN_TEXT:
        check_stream(csv_row_events(data), profile)
    else:
        check_stream(iter_row_events(codec.loads(data).sheets[0]), profile)
    print(f"{profile_name}: OK")


def main():
    parser = command_line_parser()
    args = parser.parse_args()

    if args.version:
        print(_get_version())
        return

    hdlr = logging.StreamHandler()
    hdlr.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    logger.addHandler(hdlr)
    if args.debug:
        logger.setLevel("DEBUG")
    else:
        logger.setLevel("ERROR")

    for profile_name in args.profile or list(PROFILES):
        try:
            check_profile(args, profile_name)
        except (FidelityError, StreamError) as e:
            print(f"{profile_name}:", str(e), file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    # execute only if run as a script
    main()  # pragma: no cover
