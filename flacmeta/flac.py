# Copyright (C) 2005  Joe Wreschnig
#               2026  flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Read FLAC stream information and Vorbis comments.

Read more about FLAC at https://xiph.org/flac/.

A FLAC file starts with the "fLaC" marker, followed by a sequence of
metadata blocks and then the audio frames. Every block starts with a
four byte header (last-block flag, 7 bit type, 24 bit length).

Two block types are decoded: the stream information block, which has
to be the first block, and the Vorbis comment block. Padding,
application, seek table, cue sheet and picture blocks are counted and
skipped without being read.

This module does not handle Ogg FLAC files.

Based off documentation available at
https://xiph.org/flac/format.html
"""

__all__ = ["FLAC", "Open"]

import logging
import re
import struct

from flacmeta._file import FileType, StreamInfo as BaseStreamInfo
from flacmeta._util import (
    FlacMetaError,
    cdata,
    convert_error,
    endswith,
    enum,
    get_size,
    loadfile,
    read_full,
    to_int_be,
)
from flacmeta._vorbis import VCommentDict, error as VorbisError

logger = logging.getLogger(__name__)


BLOCK_SIZE_MIN = 16
BLOCK_SIZE_MAX = 65535
SAMPLE_RATE_MIN = 1
SAMPLE_RATE_MAX = 655350
"""Limited by the structure of frame headers."""

MAX_BLOCK_TYPE = 126
"""127 is invalid, to avoid confusion with a frame sync code."""

STREAMINFO_SIZE = 34
HEADER_SIZE = 4
MAGIC = b"fLaC"

_MD5_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class error(FlacMetaError):
    pass


class FLACAccessError(IOError, error):
    """The file could not be opened, sized or read."""


class FLACTruncatedError(FLACAccessError):
    """Less data than a block header or block length promised."""


class FLACFormatError(error):
    pass


class FLACNoHeaderError(FLACFormatError):
    pass


class FLACBlockTypeError(FLACFormatError):
    pass


class FLACStructureError(ValueError, error):
    pass


class FLACBlockOrderError(FLACStructureError):
    pass


class FLACStreamInfoError(FLACStructureError):
    pass


class FLACVorbisError(FLACStructureError):
    pass


@enum
class BlockType(object):
    """Metadata block type codes"""

    STREAMINFO = 0
    PADDING = 1
    APPLICATION = 2
    SEEKTABLE = 3
    VORBIS_COMMENT = 4
    CUESHEET = 5
    PICTURE = 6


BLOCK_TYPES = [BlockType(i) for i in range(7)]


def parse_block_header(data):
    """Decode a metadata block header.

    Args:
        data (bytes): the four header bytes
    Returns:
        tuple: (is_last, block type code, payload length)
    """

    value = cdata.uint_be(data)
    return cdata.test_bit(value, 31), (value >> 24) & 0x7F, value & 0xFFFFFF


class MetadataBlock(object):
    """A generic block of FLAC metadata.

    This class is extended by specific blocks. The block header should
    not be included in the data.
    """

    code = None

    def __init__(self, data):
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(
                "%s requires bytes, not %r" % (type(self).__name__, data))
        self.load(bytes(data))

    def load(self, data):
        raise NotImplementedError


class StreamInfo(MetadataBlock, BaseStreamInfo):
    """StreamInfo()

    FLAC stream information.

    This contains information about the audio data in the FLAC file.

    Attributes:
        min_blocksize (`int`): minimum audio block size, in samples
        max_blocksize (`int`): maximum audio block size, in samples
        min_framesize (`int`): minimum frame size in bytes, 0 if unknown
        max_framesize (`int`): maximum frame size in bytes, 0 if unknown
        sample_rate (`int`): audio sample rate in Hz
        channels (`int`): audio channels (1 for mono, 2 for stereo)
        bits_per_sample (`int`): bits per sample
        total_samples (`int`): total samples in file
        length (`float`): audio length in seconds
        md5_signature (`str`): MD5 of the unencoded audio data,
            32 lowercase hex characters
    """

    code = BlockType.STREAMINFO

    def __eq__(self, other):
        try:
            return (self.min_blocksize == other.min_blocksize and
                    self.max_blocksize == other.max_blocksize and
                    self.min_framesize == other.min_framesize and
                    self.max_framesize == other.max_framesize and
                    self.sample_rate == other.sample_rate and
                    self.channels == other.channels and
                    self.bits_per_sample == other.bits_per_sample and
                    self.total_samples == other.total_samples and
                    self.md5_signature == other.md5_signature)
        except AttributeError:
            return False

    def load(self, data):
        if len(data) < STREAMINFO_SIZE:
            raise FLACStreamInfoError(
                "STREAMINFO block has %d bytes, need %d" % (
                    len(data), STREAMINFO_SIZE))

        min_blocksize, max_blocksize = struct.unpack(">HH", data[:4])
        min_framesize = to_int_be(data[4:7])
        max_framesize = to_int_be(data[7:10])

        # 20 bits sample rate, 3 bits channels - 1,
        # 5 bits bits per sample - 1, 36 bits total samples
        packed = cdata.ulonglong_be(data[10:18])
        sample_rate = packed >> 44
        channels = ((packed >> 41) & 0x7) + 1
        bits_per_sample = ((packed >> 36) & 0x1F) + 1
        total_samples = packed & 0xFFFFFFFFF

        md5_signature = data[18:34].hex()

        if min_blocksize < BLOCK_SIZE_MIN:
            raise FLACStreamInfoError(
                "minimum block size of %d is less than the allowed "
                "minimum of %d" % (min_blocksize, BLOCK_SIZE_MIN))
        if max_blocksize > BLOCK_SIZE_MAX:
            raise FLACStreamInfoError(
                "maximum block size of %d is more than the allowed "
                "maximum of %d" % (max_blocksize, BLOCK_SIZE_MAX))
        if min_blocksize > max_blocksize:
            raise FLACStreamInfoError(
                "minimum block size of %d must not be more than maximum "
                "block size of %d" % (min_blocksize, max_blocksize))
        if not SAMPLE_RATE_MIN <= sample_rate <= SAMPLE_RATE_MAX:
            raise FLACStreamInfoError(
                "sample rate of %d is invalid, it must be within "
                "%d-%d" % (sample_rate, SAMPLE_RATE_MIN, SAMPLE_RATE_MAX))
        if not _MD5_PATTERN.match(md5_signature):
            raise FLACStreamInfoError(
                "invalid MD5 signature %r" % md5_signature)

        self.min_blocksize = min_blocksize
        self.max_blocksize = max_blocksize
        self.min_framesize = min_framesize
        self.max_framesize = max_framesize
        self.sample_rate = sample_rate
        self.channels = channels
        self.bits_per_sample = bits_per_sample
        self.total_samples = total_samples
        self.length = total_samples / float(sample_rate)
        self.md5_signature = md5_signature

    def pprint(self):
        return u"FLAC, %.2f seconds, %d Hz" % (self.length, self.sample_rate)


class VCFLACDict(VCommentDict):
    """VCFLACDict()

    Vorbis comments embedded in a FLAC file.

    FLAC files don't use the framing bit at the end of the comment
    block, so this is a plain VCommentDict with the block code.
    """

    code = BlockType.VORBIS_COMMENT


class MetadataScanner(object):
    """Walks the metadata blocks following the "fLaC" marker.

    The file object has to be positioned right after the marker. The
    scan stops after the block with the last-block flag set or at the
    end of the data.

    Attributes:
        info (`StreamInfo`): the stream information, or None
        tags (`VCFLACDict`): the most recent Vorbis comment, or None
        block_counts (List[`int`]): number of blocks per type code
    """

    def __init__(self, fileobj, size):
        self._fileobj = fileobj
        self._size = size
        self._seen_block = False
        self._seen_streaminfo = False
        self.info = None
        self.tags = None
        self.block_counts = [0] * len(BLOCK_TYPES)

    def scan(self):
        last = False
        while not last and self._fileobj.tell() < self._size:
            last = self._read_block()
        return self

    def _read_block(self):
        """Returns True if this was the last metadata block"""

        offset = self._fileobj.tell()
        try:
            header = read_full(self._fileobj, HEADER_SIZE)
        except IOError as e:
            raise FLACTruncatedError(
                "can't read metadata block header at offset %d: %s" % (
                    offset, e))

        last, code, length = parse_block_header(header)
        logger.debug("block type %d at offset %d, %d bytes%s",
                     code, offset, length, " (last)" if last else "")

        if code == StreamInfo.code:
            if self._seen_streaminfo:
                raise FLACBlockOrderError(
                    "STREAMINFO block at offset %d must occur only "
                    "once" % offset)
            if self._seen_block:
                raise FLACBlockOrderError(
                    "STREAMINFO block at offset %d must be the first "
                    "metadata block" % offset)
            data = self._read_payload("STREAMINFO", offset, length)
            try:
                self.info = StreamInfo(data)
            except FLACStreamInfoError as e:
                raise FLACStreamInfoError(
                    "STREAMINFO block at offset %d: %s" % (offset, e))
            self._seen_streaminfo = True
        elif code == VCFLACDict.code:
            data = self._read_payload("VORBIS_COMMENT", offset, length)
            try:
                self.tags = VCFLACDict(data)
            except VorbisError as e:
                raise FLACVorbisError(
                    "VORBIS_COMMENT block at offset %d: %s" % (offset, e))
        elif code <= MAX_BLOCK_TYPE:
            if code >= len(BLOCK_TYPES):
                logger.debug("skipping reserved block type %d", code)
            self._fileobj.seek(length, 1)
        else:
            raise FLACBlockTypeError(
                "invalid metadata block type %d at offset %d" % (
                    code, offset))

        if code < len(BLOCK_TYPES):
            self.block_counts[code] += 1
        self._seen_block = True
        return last

    def _read_payload(self, name, offset, length):
        try:
            return read_full(self._fileobj, length)
        except IOError as e:
            raise FLACTruncatedError(
                "can't read %s block at offset %d: %s" % (
                    name, offset, e))


class FLAC(FileType):
    """FLAC(filething)

    A FLAC audio file.

    Args:
        filething (filething)

    Attributes:
        info (`StreamInfo`): the stream information, or None if the file
            has no STREAMINFO block
        tags (`VCFLACDict`): the Vorbis comment, or None
        size (`int`): the file size in bytes
        block_counts (Tuple[`int`]): number of metadata blocks per type
            code, ordered 0 (STREAMINFO) to 6 (PICTURE)

    Raises:
        FLACAccessError: the file could not be opened or read
        FLACFormatError: not a FLAC file or an invalid block type
        FLACStructureError: a block contradicts the format
    """

    _mimes = ["audio/flac", "audio/x-flac", "application/x-flac"]

    info = None
    tags = None
    size = 0
    block_counts = (0,) * len(BLOCK_TYPES)

    @staticmethod
    def score(filename, fileobj, header):
        return (header.startswith(MAGIC) * 3 +
                endswith(filename.lower(), ".flac"))

    @convert_error(IOError, FLACAccessError)
    @loadfile()
    def load(self, filething):
        """Load file information from a filename or file object."""

        fileobj = filething.fileobj

        if fileobj.read(len(MAGIC)) != MAGIC:
            raise FLACNoHeaderError(
                "%r is not a valid FLAC file" % filething.name)

        size = get_size(fileobj)
        scanner = MetadataScanner(fileobj, size).scan()

        self.size = size
        self.info = scanner.info
        self.tags = scanner.tags
        self.block_counts = tuple(scanner.block_counts)

    @property
    def vorbis_comment(self):
        """The Vorbis comment as a dict with the keys ``vendor_length``,
        ``vendor_string`` and ``comments`` (a dict of lists), or an empty
        dict if the file has none.

        ``vendor_string`` is decoded text, see `VComment`. The undecoded
        vendor bytes are in ``tags.vendor_data``.
        """

        if self.tags is None:
            return {}
        return {
            "vendor_length": self.tags.vendor_length,
            "vendor_string": self.tags.vendor,
            "comments": self.tags.as_dict(),
        }


Open = FLAC
