# Copyright (C) 2005  Michael Urman
#               2026  flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""flacmeta reads the metadata blocks of FLAC files.

    from flacmeta.flac import FLAC
    audio = FLAC(filename)
    print(audio.info.sample_rate, audio.info.length)
    print(audio["title"])

The stream information and Vorbis comments are decoded, every other
metadata block is only counted. Audio frames are never read.

Nothing in flacmeta writes to the file.
"""

import logging

from flacmeta._util import FlacMetaError
from flacmeta._file import FileType, StreamInfo
from flacmeta._tags import Tags


version = (1, 0, 0)
"""Version tuple."""

version_string = ".".join(map(str, version))
"""Version string."""


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = ["FlacMetaError", "FileType", "StreamInfo", "Tags",
           "version", "version_string"]
