# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Per-verb command-line entry points.

Each verb module exposes ``main(argv) -> int`` for tests and ``cli()``
for the console script, which exits with the returned code.
"""
