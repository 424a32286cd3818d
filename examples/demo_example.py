#!/usr/bin/env python3
"""
Example script demonstrating the usage of ArgParser.

Declares a handful of arguments, then prints each typed value (or a failure
marker) followed by every token the parser did not recognize.

    python demo_example.py -i 42 -lb y -s3 a b c --list x --list y extra
"""

import sys

from definition_argparser import ArgDefinition, ArgParser, __version__

ARG_HELP = "--help"
ARG_VERSION = "--version"
ARG_LENIENT_BOOL = "--lenient-bool"
ARG_STRICT_BOOL = "--strict-bool"
ARG_BYTE = "--byte"
ARG_INT = "--int"
ARG_LONG = "--long"
ARG_STRING = "--string"
ARG_SPAN3 = "--span3"
ARG_LIST = "--list"

MISSING = "Not Exists / Format Error"


def parse_uint8(text: str) -> int:
    value = int(text)
    if not 0 <= value <= 255:
        raise ValueError(f"{value} is out of range for uint8")
    return value


def main() -> None:
    """Main function demonstrating the parser."""
    parser = ArgParser(
        sys.argv[1:],
        ArgDefinition(ARG_HELP, 0, aliases=("-h", "-?")),
        ArgDefinition(ARG_VERSION, 0, aliases=("-v",)),
        ArgDefinition(
            ARG_LENIENT_BOOL,
            1,
            aliases=("-lb",),
            info="receive boolean, true=yes=1, false=no=0",
        ),
        ArgDefinition(ARG_STRICT_BOOL, 1, aliases=("-sb",), info="receive boolean, true/false"),
        ArgDefinition(ARG_BYTE, 1, aliases=("-b",), info="receive uint8"),
        ArgDefinition(ARG_INT, 1, aliases=("-i",), default="12345", info="receive int32"),
        ArgDefinition(ARG_LONG, 1, aliases=("-l",), info="receive int64"),
        ArgDefinition(ARG_STRING, 1, aliases=("-s",), info="receive string"),
        ArgDefinition(ARG_SPAN3, 3, aliases=("-s3",), info="receive 3 strings"),
        ArgDefinition(ARG_LIST, 1, info="receive string list"),
        ignore_case=True,
    )

    if ARG_HELP in parser:
        parser.write_help()
        print()
        return
    if ARG_VERSION in parser:
        print(f"definition-argparser {__version__}")
        return

    scalars = [
        (ARG_LENIENT_BOOL, parser.try_get_boolean(ARG_LENIENT_BOOL)),
        (ARG_STRICT_BOOL, parser.try_get_strict_boolean(ARG_STRICT_BOOL)),
        (ARG_BYTE, parser.try_get(ARG_BYTE, int, provider=parse_uint8)),
        (ARG_INT, parser.try_get(ARG_INT, int)),
        (ARG_LONG, parser.try_get(ARG_LONG, int)),
        (ARG_STRING, parser.try_get_string(ARG_STRING)),
    ]
    for name, result in scalars:
        print(f"{name}:")
        print(result.ok_value if result.is_ok() else MISSING)

    for name, result in [
        (ARG_SPAN3, parser.try_get_span(ARG_SPAN3)),
        (ARG_LIST, parser.try_get_full_list(ARG_LIST)),
    ]:
        print(f"{name}:")
        if result.is_ok():
            for value in result.ok_value:
                print(value)
        else:
            print(MISSING)

    print(f"UnknownArgs: {len(parser.unknown_args)}")
    for token in parser.unknown_args:
        print(token)


if __name__ == "__main__":
    main()
