#!/usr/bin/env python3
"""
Name: encode
Description: show a message in base2, base8 and base16
License: perl

Each encoding pulls a fixed number of bits per symbol out of the message:
one for base2, three for base8 and four for base16. base8 is the odd one
out, since 3 does not divide 8 and the bytes have to be taken three at a
time (see groupenc for the details).
"""

import sys
import os
import argparse

from groupenc import get_encoder

__version__ = "1.0"

EXIT_SUCCESS = 0

# (heading, preset name), in the order they are printed
DEMOS = (
    ("Base2", 'base2'),
    ("Base8", 'base8'),
    ("Base16", 'base16'),
)


def show_encodings(message: bytes, output_stream=None):
    """Prints every demo encoding of `message`, each under its own heading."""
    output_stream = output_stream or sys.stdout
    for heading, name in DEMOS:
        print(f"{heading} encoding:", file=output_stream)
        print(get_encoder(name).encode_bytes(message), file=output_stream)


def main():
    parser = argparse.ArgumentParser(
        description="Print a message in base2, base8 and base16.",
        usage="%(prog)s [-v] [message ...]"
    )
    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument('message', nargs='*', help="Words to encode, joined by spaces (default: foo).")

    args = parser.parse_args()

    text = " ".join(args.message) if args.message else "foo"
    # os.fsencode gives back the raw argv bytes, undecodable ones included.
    show_encodings(os.fsencode(text))

    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
