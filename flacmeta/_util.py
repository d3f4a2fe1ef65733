# Copyright 2006 Joe Wreschnig
#           2026 flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Utility classes for flacmeta.

You should not rely on the interfaces here being stable. They are
intended for internal use in flacmeta only.
"""

import os
import struct
from contextlib import contextmanager
from functools import reduce, wraps
from typing import BinaryIO, NamedTuple


class FlacMetaError(Exception):
    """Base class for all custom exceptions in flacmeta"""

    __module__ = "flacmeta"


class FileThing(NamedTuple):
    """What `loadfile` passes on: an open binary file object, the path
    it was opened from (None for a caller's file object) and a name for
    messages and type sniffing.
    """

    fileobj: BinaryIO
    filename: str | bytes | None
    name: str | bytes | None


def convert_error(exc_src, exc_dest):
    """A decorator for reraising exceptions with a different type.
    Mostly useful for IOError.

    Args:
        exc_src (type): The source exception type
        exc_dest (type): The target exception type.
    """

    def wrap(func):

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exc_dest:
                raise
            except exc_src as err:
                raise exc_dest(err) from err

        return wrapper

    return wrap


def is_fileobj(fileobj):
    """Returns:
        bool: if an argument passed ot loadfile should be handled as
            a file object
    """

    return not (isinstance(fileobj, (str, bytes)) or
                hasattr(fileobj, "__fspath__"))


def verify_fileobj(fileobj):
    """Verifies that the passed fileobj is a file like object which
    we can use.

    Raises:
        ValueError: In case the object is not a file object that is readable
    """

    try:
        data = fileobj.read(0)
    except Exception:
        if not hasattr(fileobj, "read"):
            raise ValueError("%r not a valid file object" % fileobj)
        raise ValueError("Can't read from file object %r" % fileobj)

    if not isinstance(data, bytes):
        raise ValueError(
            "file object %r not opened in binary mode" % fileobj)


def fileobj_name(fileobj):
    """
    Returns:
        str: A potential filename for a file object. Always a valid
            path type, but might be empty or non-existent.
    """

    value = getattr(fileobj, "name", u"")
    if not isinstance(value, (str, bytes)):
        value = str(value)
    return value


@contextmanager
def _openfile(instance, filething, filename, fileobj):
    """yields a FileThing

    Args:
        filething: Either a file name, a file object or None
        filename: Either a file name or None
        fileobj: Either a file object or None
    Raises:
        IOError: In case opening the file failed
        TypeError: in case neither a file name or a file object is passed
    """

    assert not filename or not fileobj

    if isinstance(filething, FileThing):
        filename = filething.filename
        fileobj = filething.fileobj
        filething = None

    if filething is not None:
        if is_fileobj(filething):
            fileobj = filething
        elif hasattr(filething, "__fspath__"):
            filename = filething.__fspath__()
        else:
            filename = filething

    if instance is not None:
        instance.filename = filename

    if fileobj is not None:
        verify_fileobj(fileobj)
        yield FileThing(fileobj, filename, filename or fileobj_name(fileobj))
    elif filename is not None:
        with open(filename, "rb") as fileobj:
            yield FileThing(fileobj, filename, filename)
    else:
        raise TypeError("Missing filename or fileobj argument")


def loadfile(method=True):
    """A decorator for functions taking a `filething` as a first argument.

    Passes a FileThing instance as the first argument to the wrapped
    function. A file name is opened for reading and closed again on
    every exit path, a passed file object is left open.

    Args:
        method (bool): If the wrapped functions is a method
    """

    def convert_file_args(args, kwargs):
        filething = args[0] if args else None
        filename = kwargs.pop("filename", None)
        fileobj = kwargs.pop("fileobj", None)
        return filething, filename, fileobj, args[1:], kwargs

    def wrap(func):

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            filething, filename, fileobj, args, kwargs = \
                convert_file_args(args, kwargs)
            with _openfile(self, filething, filename, fileobj) as h:
                return func(self, h, *args, **kwargs)

        @wraps(func)
        def wrapper_func(*args, **kwargs):
            filething, filename, fileobj, args, kwargs = \
                convert_file_args(args, kwargs)
            with _openfile(None, filething, filename, fileobj) as h:
                return func(h, *args, **kwargs)

        return wrapper if method else wrapper_func

    return wrap


def enum(cls):
    """A decorator for creating an int enum class.

    Makes the values a subclass of the type and implements repr/str.
    The new class will be a subclass of int.

    Args:
        cls (type): The class to convert to an enum

    Returns:
        type: A new class

    ::

        @enum
        class Foo(object):
            FOO = 1
            BAR = 2
    """

    assert cls.__bases__ == (object,)

    d = dict(cls.__dict__)
    new_type = type(cls.__name__, (int,), d)
    new_type.__module__ = cls.__module__

    map_ = {}
    for key, value in d.items():
        if key.upper() == key and isinstance(value, int):
            value_instance = new_type(value)
            setattr(new_type, key, value_instance)
            map_[value] = key

    def str_(self):
        if self in map_:
            return "%s.%s" % (type(self).__name__, map_[self])
        return "%d" % int(self)

    def repr_(self):
        if self in map_:
            return "<%s.%s: %d>" % (
                type(self).__name__, map_[self], int(self))
        return "%d" % int(self)

    setattr(new_type, "__repr__", repr_)
    setattr(new_type, "__str__", str_)

    return new_type


class cdata(object):
    """C character buffer to Python numeric type conversions."""

    uint_le = staticmethod(lambda data: struct.unpack('<I', data)[0])
    uint_be = staticmethod(lambda data: struct.unpack('>I', data)[0])

    ulonglong_be = staticmethod(lambda data: struct.unpack('>Q', data)[0])

    test_bit = staticmethod(lambda value, n: bool((value >> n) & 1))


def to_int_be(data):
    """Convert an arbitrarily-long string to a long using big-endian
    byte order."""
    return reduce(lambda a, b: (a << 8) + b, bytearray(data), 0)


def get_size(fileobj):
    """Returns the size of the file.
    The position when passed in will be preserved if no error occurs.

    Args:
        fileobj (fileobj)
    Returns:
        int: The size of the file
    Raises:
        IOError
    """

    old_pos = fileobj.tell()
    try:
        fileobj.seek(0, os.SEEK_END)
        return fileobj.tell()
    finally:
        fileobj.seek(old_pos, os.SEEK_SET)


def read_full(fileobj, size):
    """Like fileobj.read but raises IOError if not all requested data is
    returned.

    If you want to distinguish IOError and the EOS case, better handle
    the error yourself instead of using this.

    Args:
        fileobj (fileobj)
        size (int): amount of bytes to read
    Raises:
        IOError: In case read fails or not enough data is read
    """

    if size < 0:
        raise ValueError("size must not be negative")

    data = fileobj.read(size)
    if len(data) != size:
        raise IOError("expected %d bytes, got %d" % (size, len(data)))
    return data


def endswith(text, end):
    # useful for paths which can be both, str and bytes
    if isinstance(text, str):
        if not isinstance(end, str):
            end = end.decode("ascii")
    else:
        if not isinstance(end, bytes):
            end = end.encode("ascii")
    return text.endswith(end)
