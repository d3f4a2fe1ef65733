# Copyright (C) 2005  Michael Urman
#               2026  flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.


class FileType(object):
    """FileType(filething, **kwargs)

    Args:
        filething (filething): A filename or a file-like object

    An abstract object wrapping tags and audio stream information.

    Each file format has different potential tags and stream
    information. The dict-like read interface on a FileType looks up
    the values in its tags.

    Attributes:
        info (`StreamInfo`): contains length, sample rate etc., or None
        tags (`Tags`): metadata tags, if any, otherwise None
    """

    __module__ = "flacmeta"

    info = None
    tags = None
    filename = None
    _mimes = ["application/octet-stream"]

    def __init__(self, *args, **kwargs):
        self.load(*args, **kwargs)

    def load(self, *args, **kwargs):
        raise NotImplementedError

    def __getitem__(self, key):
        """Look up a metadata tag key.

        If the file has no tags at all, a KeyError is raised.
        """

        if self.tags is None:
            raise KeyError(key)
        else:
            return self.tags[key]

    def __contains__(self, key):
        return self.tags is not None and key in self.tags

    def keys(self):
        """Return a list of keys in the metadata tag.

        If the file has no tags at all, an empty list is returned.
        """

        if self.tags is None:
            return []
        else:
            return self.tags.keys()

    def pprint(self):
        """
        Returns:
            text: stream information and comment key=value pairs.
        """

        if self.info is None:
            stream = u"%s, no stream information" % type(self).__name__
        else:
            stream = u"%s (%s)" % (self.info.pprint(), self.mime[0])

        if self.tags is None:
            return stream
        tags = self.tags.pprint()
        return stream + ((tags and u"\n" + tags) or u"")

    @property
    def mime(self):
        """A list of mime types (:class:`text`)"""

        mimes = []
        for Kind in type(self).__mro__:
            for mime in getattr(Kind, '_mimes', []):
                if mime not in mimes:
                    mimes.append(mime)
        return mimes

    @staticmethod
    def score(filename, fileobj, header):
        """Returns a score for how likely the file can be parsed by this type.

        Args:
            filename (fspath): a file path
            fileobj (fileobj): a file object open in rb mode. Position is
                undefined
            header (bytes): data of undefined length, starts with the start of
                the file.

        Returns:
            int: negative if definitely not a matching type, otherwise a score,
                the bigger the more certain that the file can be loaded.
        """

        raise NotImplementedError


class StreamInfo(object):
    """Abstract stream information object.

    Provides attributes for length, sample rate, number of channels
    etc. depending on the format.
    """

    __module__ = "flacmeta"

    def pprint(self):
        """
        Returns:
            text: Print stream information
        """

        raise NotImplementedError
