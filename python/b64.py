#!/usr/bin/env python3
"""
Name: b64
Description: encode data as base64
License: artistic2
"""

import sys
import os
import argparse

from groupenc import get_encoder

__version__ = "1.1"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class NamedStream:
    """
    Wraps a stream so that any OSError it raises carries `name` as its
    filename, which lets main() say which side of the pipe broke.
    """
    def __init__(self, stream, name):
        self.stream = stream
        self.name = name

    def _call(self, method, *args):
        try:
            return method(*args)
        except OSError as e:
            e.filename = self.name
            raise

    def read(self, n):
        return self._call(self.stream.read, n)

    def write(self, text):
        return self._call(self.stream.write, text)

    def flush(self):
        flush = getattr(self.stream, 'flush', None)
        if flush is not None:
            self._call(flush)


def encode_stream(encoder, input_stream, output_stream, input_name='-', output_name='stdout'):
    """
    Runs the encoder from input_stream to output_stream, flushing after
    every chunk. Returns the number of base64 symbols written.
    """
    return encoder.encode(NamedStream(input_stream, input_name),
                          NamedStream(output_stream, output_name))


def main():
    """Parses arguments and runs the encoder over a file or stdin."""
    parser = argparse.ArgumentParser(
        description="Encode data as base64 to standard output.",
        usage="%(prog)s [-v] [FILE]"
    )
    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        'input_file',
        nargs='?',
        default='-',
        help="Input file to encode. Reads from stdin if not specified or if FILE is '-'."
    )

    args = parser.parse_args()
    program_name = os.path.basename(sys.argv[0])

    encoder = get_encoder('base64')

    try:
        if args.input_file == '-':
            encode_stream(encoder, sys.stdin.buffer, sys.stdout)
        else:
            if os.path.isdir(args.input_file):
                print(f"{program_name}: '{args.input_file}' is a directory", file=sys.stderr)
                sys.exit(EXIT_FAILURE)
            with open(args.input_file, 'rb') as input_stream:
                encode_stream(encoder, input_stream, sys.stdout, input_name=args.input_file)
    except OSError as e:
        print(f"{program_name}: {e.filename or args.input_file}: {e.strerror or e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
