# Copyright (C) 2005  Michael Urman
#               2026  flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.


class Tags(object):
    """`Tags` is the base class of all read-only tag containers.

    Subclasses are loaded once from the bytes of a metadata block and
    are not changed afterwards.
    """

    __module__ = "flacmeta"

    def keys(self):
        """
        Returns:
            List[`text`]: the tag names in the order they first appear
        """

        raise NotImplementedError

    def pprint(self):
        """
        Returns:
            text: tag information
        """

        raise NotImplementedError
