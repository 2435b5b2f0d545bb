"""Command line front end for the RIM tool.

The grammar is fixed: every token is matched exactly against a long
``--name`` form or a short ``-x`` form, left to right, in a single pass.
Options with an optional argument look ahead one token and take it unless it
starts with ``-``; ``--verify`` and ``--parse`` always take the next token.

:func:`parse_arguments` never exits; it returns either a :class:`RimIntent`
or a :class:`UsageRequest`. Only :func:`main` turns the latter into exit
status 1.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

from .intent import DEFAULT_HASH_ALG, Mode, RimIntent, UsageRequest
from .settings import settings

COMMAND_PREFIX = "-"
FULL_COMMAND_PREFIX = "--"
CREATE_STRING = "create"
VERIFY_STRING = "verify"
HELP_STRING = "help"
PARSE_STRING = "parse"
ATTRIBUTES_STRING = "attributes"
KEYSTORE_STRING = "keystore"
SHOW_CERT_STRING = "show-cert"

ParseOutcome = Union[RimIntent, UsageRequest]


def _flag(name: str, short: Optional[str] = None) -> tuple[str, ...]:
    forms = (FULL_COMMAND_PREFIX + name,)
    if short:
        forms += (COMMAND_PREFIX + short,)
    return forms


CREATE_FLAGS = _flag(CREATE_STRING, "c")
ATTRIBUTES_FLAGS = _flag(ATTRIBUTES_STRING, "a")
VERIFY_FLAGS = _flag(VERIFY_STRING, "v")
PARSE_FLAGS = _flag(PARSE_STRING, "p")
KEYSTORE_FLAGS = _flag(KEYSTORE_STRING, "k")
SHOW_CERT_FLAGS = _flag(SHOW_CERT_STRING)
HELP_FLAGS = _flag(HELP_STRING, "h")


def _optional_value(args: Sequence[str], i: int) -> Optional[str]:
    """Token after ``args[i]`` when it does not look like another flag."""
    if i + 1 < len(args) and not args[i + 1].startswith(COMMAND_PREFIX):
        return args[i + 1]
    return None


def is_valid_path(filepath: str) -> bool:
    """True when *filepath* could be created or overwritten as a regular file.

    Only probes the filesystem; nothing is created.
    """
    logging.info("Checking for a valid creation path...")
    try:
        path = Path(filepath)
        if path.exists():
            return path.is_file() and os.access(path, os.W_OK)
        parent = path.parent if str(path.parent) else Path(".")
        return parent.is_dir() and os.access(parent, os.W_OK | os.X_OK)
    except (OSError, ValueError):
        return False


def parse_arguments(argv: Sequence[str]) -> ParseOutcome:
    args = list(argv)
    if not args:
        return UsageRequest()

    mode = Mode.NONE
    create_output_file = ""
    attributes_given = False
    attributes_file = ""
    verify_input_path: Optional[str] = None
    parse_input_path: Optional[str] = None
    keystore_given = False
    keystore = ""
    show_cert = False

    i = 0
    while i < len(args):
        token = args[i]
        if token in CREATE_FLAGS:
            mode = Mode.CREATE
            value = _optional_value(args, i)
            if value is not None:
                create_output_file = value
                i += 1
        elif token in ATTRIBUTES_FLAGS:
            attributes_given = True
            value = _optional_value(args, i)
            if value is not None:
                attributes_file = value
                i += 1
        elif token in VERIFY_FLAGS:
            if i + 1 >= len(args):
                return UsageRequest(message=f"Missing input file for {FULL_COMMAND_PREFIX}{VERIFY_STRING}")
            mode = Mode.VERIFY
            i += 1
            verify_input_path = args[i]
        elif token in PARSE_FLAGS:
            if i + 1 >= len(args):
                return UsageRequest(message=f"Missing input file for {FULL_COMMAND_PREFIX}{PARSE_STRING}")
            mode = Mode.PARSE
            i += 1
            parse_input_path = args[i]
        elif token in KEYSTORE_FLAGS:
            keystore_given = True
            value = _optional_value(args, i)
            if value is not None:
                keystore = value
                i += 1
        elif token in SHOW_CERT_FLAGS:
            show_cert = True
        elif token in HELP_FLAGS:
            return UsageRequest()
        else:
            # unrecognized tokens print plain usage too
            return UsageRequest()
        i += 1

    hash_alg = None
    if mode is Mode.CREATE:
        hash_alg = DEFAULT_HASH_ALG
        if create_output_file and not is_valid_path(create_output_file):
            return UsageRequest(message=f"Invalid file path {create_output_file}!")

    return RimIntent(
        mode=mode,
        has_arguments=True,
        create_output_file=create_output_file,
        attributes_given=attributes_given,
        attributes_file=attributes_file,
        verify_input_path=verify_input_path,
        parse_input_path=parse_input_path,
        hash_alg=hash_alg,
        show_cert=show_cert,
        keystore_given=keystore_given,
        keystore=keystore,
    )


def format_usage(message: Optional[str] = None) -> str:
    lines = []
    if message:
        lines.append(f"ERROR: {message}\n")
    lines.append("Usage: rim-tool")
    lines.append("   -c, --create <file>\t\tCreate a base rim and write to\n"
                 "   \t\t\t\tthe given file. If no file is given the default is\n"
                 f"   \t\t\t\t{settings.default_output_file}\n")
    lines.append("   -a, --attributes <file>\tSpecify the JSON file that contains\n"
                 "   \t\t\t\tthe xml attributes to add to the RIM\n")
    lines.append("   -v, --verify <file>\t\tTakes the provided input file and\n"
                 "   \t\t\t\tvalidates it against the schema at\n"
                 "   \t\t\t\thttp://standards.iso.org/iso/19770/-2/2015/schema.xsd\n")
    lines.append("   -p, --parse <file>\t\tParse the given swidtag's payload\n")
    lines.append("   -k, --keystore <file>\tSpecify the keystore and its location to use\n"
                 "   \t\t\t\tfor digital signatures\n")
    lines.append("   --show-cert\t\t\tPrint the certificate in the signature block of\n"
                 "   \t\t\t\tthe base RIM\n")
    lines.append("   -h, --help, <no args>\tPrints this command help information.\n"
                 "   \t\t\t\tListing no command arguments will also\n"
                 "   \t\t\t\tprint this help text.\n")
    lines.append("Example commands: \n"
                 f"   Create a base rim from the default attribute file ({settings.default_attributes_file})\n"
                 "   and write the rim\n"
                 f"   to {settings.default_output_file}:\n\n"
                 "   \t\trim-tool -c\n\n"
                 "   Create a base rim from the values in config.json and write the rim\n"
                 "   to base_rim.swidtag:\n\n"
                 "   \t\trim-tool -c base_rim.swidtag -a config.json\n")
    return "\n".join(lines)


def print_usage(message: Optional[str] = None) -> None:
    print(format_usage(message))


class ManifestHandlers(Protocol):
    """Manifest operations that act on a parsed intent; each returns an exit status."""

    def create(self, intent: RimIntent) -> int: ...

    def verify(self, intent: RimIntent) -> int: ...

    def parse(self, intent: RimIntent) -> int: ...

    def show_certificate(self, intent: RimIntent) -> int: ...


def dispatch(intent: RimIntent, handlers: ManifestHandlers) -> int:
    status = 0
    if intent.mode is Mode.CREATE:
        status = handlers.create(intent)
    elif intent.mode is Mode.VERIFY:
        status = handlers.verify(intent)
    elif intent.mode is Mode.PARSE:
        status = handlers.parse(intent)
    if status:
        return status
    if intent.show_cert:
        status = handlers.show_certificate(intent)
    return status


def main(argv: Optional[Sequence[str]] = None, handlers: Optional[ManifestHandlers] = None) -> int:
    logging.basicConfig(level=settings.log_level)
    outcome = parse_arguments(sys.argv[1:] if argv is None else argv)
    if isinstance(outcome, UsageRequest):
        print_usage(outcome.message)
        return 1
    if handlers is not None:
        return dispatch(outcome, handlers)
    if outcome.create and not outcome.create_output_file:
        logging.info("No output file given; using %s", settings.default_output_file)
    if outcome.create and not outcome.attributes_file:
        logging.info("No attributes file given; using %s", settings.default_attributes_file)
    print(outcome.to_json())
    return 0


def run() -> None:  # pragma: no cover - console script shim
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
