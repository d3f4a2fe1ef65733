# Copyright 2005-2006 Joe Wreschnig
#           2013 Christoph Reiter
#           2026 flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Read Vorbis comment data, as embedded in FLAC files.

A Vorbis comment is a vendor string followed by a list of
``NAME=value`` strings. Every length field is an unsigned 32 bit
integer in little-endian byte order.

Field names are case-insensitive. They are stored lower-cased here,
values are kept verbatim (including any further '=' characters).

Specification at http://www.xiph.org/vorbis/doc/v-comment.html.
"""

import logging
from io import BytesIO

from flacmeta._tags import Tags
from flacmeta._util import FlacMetaError, cdata, read_full

logger = logging.getLogger(__name__)


class error(FlacMetaError):
    pass


class VorbisTruncatedError(error):
    pass


class VorbisDelimiterError(ValueError, error):
    pass


class VorbisEncodingError(ValueError, error):
    pass


class VComment(Tags):
    """A Vorbis comment parser.

    Vorbis comments are always wrapped in something like an Ogg Vorbis
    bitstream or a FLAC metadata block, so this takes bytes or a file-like
    object, not a filename.

    All comment ordering is preserved. Iterating yields ``(key, value)``
    pairs in the order they appear in the data.

    Text is decoded as UTF-8 using the `errors` policy of `load`. With
    the default 'replace' undecodable bytes become U+FFFD, so `vendor`
    may then be shorter or longer than `vendor_length`. The vendor bytes
    as stored are kept in `vendor_data`.

    Attributes:
        vendor (text): the stream 'vendor' (i.e. writer)
        vendor_data (bytes): the vendor string exactly as stored
        vendor_length (int): the size of the encoded vendor string in bytes
    """

    vendor = u""
    vendor_data = b""
    vendor_length = 0

    def __init__(self, data=None, errors='replace'):
        self._comments = ()
        if data is not None:
            if isinstance(data, (bytes, bytearray)):
                data = BytesIO(data)
            elif not hasattr(data, 'read'):
                raise TypeError("VComment requires bytes or a file-like")
            self.load(data, errors=errors)

    def load(self, fileobj, errors='replace'):
        """Parse a Vorbis comment from a file-like object.

        Arguments:
            errors (str): 'strict', 'replace', or 'ignore'.
                This affects Unicode decoding and how other malformed content
                is interpreted.

        Raises:
            VorbisTruncatedError: if a length field points past the data
            VorbisDelimiterError: if a comment has no '=' in it
            VorbisEncodingError: if text can't be decoded with
                errors='strict'

        Nothing is changed unless the whole comment could be parsed.
        """

        vendor_length = cdata.uint_le(self._read(fileobj, 4, "vendor length"))
        vendor_data = self._read(fileobj, vendor_length, "vendor string")
        vendor = self._decode(vendor_data, errors)

        count = cdata.uint_le(self._read(fileobj, 4, "comment count"))
        comments = []
        for i in range(count):
            length = cdata.uint_le(
                self._read(fileobj, 4, "length of comment %d" % i))
            string = self._decode(
                self._read(fileobj, length, "comment %d" % i), errors)
            try:
                tag, value = string.split('=', 1)
            except ValueError:
                raise VorbisDelimiterError(
                    "comment %d %r has no '=' delimiter" % (i, string))
            comments.append((tag.lower(), value))

        logger.debug("read %d comments, vendor %r", len(comments), vendor)

        self.vendor_length = vendor_length
        self.vendor = vendor
        self.vendor_data = vendor_data
        self._comments = tuple(comments)

    @staticmethod
    def _read(fileobj, size, what):
        try:
            return read_full(fileobj, size)
        except IOError as e:
            raise VorbisTruncatedError("can't read %s: %s" % (what, e))

    @staticmethod
    def _decode(data, errors):
        try:
            return data.decode('utf-8', errors)
        except UnicodeDecodeError as e:
            raise VorbisEncodingError(e)

    def __iter__(self):
        return iter(self._comments)

    def __len__(self):
        return len(self._comments)

    def __eq__(self, other):
        if not isinstance(other, VComment):
            return NotImplemented
        return (self.vendor == other.vendor and
                self._comments == other._comments)

    __hash__ = None

    def __repr__(self):
        return "<%s vendor=%r %r>" % (
            type(self).__name__, self.vendor, list(self._comments))

    def keys(self):
        keys = []
        for key, value in self._comments:
            if key not in keys:
                keys.append(key)
        return keys

    def pprint(self):
        return u"\n".join(u"%s=%s" % (k, v) for k, v in self._comments)


class VCommentDict(VComment):
    """A VComment that looks like a dictionary.

    This object differs from a dictionary in two ways. First,
    len(comment) will still return the number of values, not the
    number of keys. Secondly, iterating through the object will
    iterate over (key, value) pairs, not keys. Since a key may have
    multiple values, the values are always lists.
    """

    def __getitem__(self, key):
        """A list of values for the key.

        This is a copy, so comment['title'].append('a title') will not
        work.
        """

        if not isinstance(key, str):
            raise KeyError(key)
        key = key.lower()
        values = [value for (k, value) in self if k == key]
        if not values:
            raise KeyError(key)
        return values

    def __contains__(self, key):
        if not isinstance(key, str):
            return False
        key = key.lower()
        for k, value in self:
            if k == key:
                return True
        return False

    def get(self, key, default=None):
        try:
            return self[key]
        except KeyError:
            return default

    def as_dict(self):
        """Return a copy of the comment data as a dict of lists.

        Keys are in the order they first appear in the data.
        """

        return dict((key, self[key]) for key in self.keys())
