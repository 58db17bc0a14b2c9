#!/usr/bin/env python3

# revlines  Read text files from the last line to the first
# Copyright (C) 2024 revlines developers
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import sys

from revlines.reader.cli.cli import getParameters
from revlines.reader.exceptions import IOFailure, UnsupportedEncodingError
from revlines.reader.log import logerror
from revlines.reader.scanner import openScanner


def main(params=None):
    config, other = getParameters(params)
    try:
        with openScanner(other["target"], config) as scanner:
            if config.lines >= 0:
                sys.stdout.write(scanner.tailText(config.lines))
            else:
                for line in scanner:
                    print(line)
    except (UnsupportedEncodingError, IOFailure, OSError, UnicodeDecodeError) as e:
        logerror(config, to_stdout=False, text=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
