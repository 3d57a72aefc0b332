# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Authenticated object operations against S3-compatible stores.

The package is split into a shared request engine and thin per-verb
command-line entry points:

- ``s3ops.credentials``: credential and endpoint resolution
- ``s3ops.resource``: ``/bucket/key`` parsing and URI encoding
- ``s3ops.signing``: AWS Signature Version 4
- ``s3ops.dispatch``: single HTTP round trip
- ``s3ops.outcome``: status classification
- ``s3ops.engine``: the pipeline tying the above together
- ``s3ops.cli``: ``s3-delete``, ``s3-get`` and ``s3-put``
"""

__version__ = "0.1.0"
