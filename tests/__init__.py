import os
import struct
from tempfile import mkstemp
from unittest import TestCase as BaseTestCase

try:
    import pytest
except ImportError:
    raise SystemExit("pytest missing: pip install pytest")


MD5 = bytes.fromhex("874465dc8789a3047d91ffd456c185cf")
VENDOR = b"reference libFLAC 1.3.1 20141125"


def build_streaminfo(min_blocksize=4096, max_blocksize=4096,
                     min_framesize=4328, max_framesize=6470,
                     sample_rate=44100, channels=1, bits_per_sample=16,
                     total_samples=44100, md5=MD5):
    """Returns the payload of a STREAMINFO block"""

    packed = ((sample_rate << 44) | ((channels - 1) << 41) |
              ((bits_per_sample - 1) << 36) | total_samples)
    return (struct.pack(">HH", min_blocksize, max_blocksize) +
            struct.pack(">I", min_framesize)[1:] +
            struct.pack(">I", max_framesize)[1:] +
            struct.pack(">Q", packed) + md5)


def build_vcomment(vendor=VENDOR, comments=()):
    """Returns the payload of a VORBIS_COMMENT block"""

    data = struct.pack("<I", len(vendor)) + vendor
    data += struct.pack("<I", len(comments))
    for comment in comments:
        data += struct.pack("<I", len(comment)) + comment
    return data


def build_block(code, data, last=False, length=None):
    """Returns a metadata block header followed by data"""

    if length is None:
        length = len(data)
    return struct.pack(">I", (last << 31) | (code << 24) | length) + data


def build_flac(*blocks, audio=b"\xff\xf8\x69\x08" + b"\x00" * 60):
    """Returns a FLAC file with the blocks and some fake audio frames"""

    return b"fLaC" + b"".join(blocks) + audio


def default_flac():
    return build_flac(
        build_block(0, build_streaminfo()),
        build_block(4, build_vcomment(comments=[
            b"TITLE=Chirp / Square (non aliased)",
            b"DATE=2017",
            b"ARTIST=Generator",
        ]), last=True))


def get_temp_empty(ext=""):
    """Returns an empty file with the extension"""

    fd, filename = mkstemp(suffix=ext)
    os.close(fd)
    return filename


def get_temp_file(data, ext=".flac"):
    """Returns a new file containing data"""

    filename = get_temp_empty(ext)
    with open(filename, "wb") as h:
        h.write(data)
    return filename


class TestCase(BaseTestCase):

    def failUnlessRaisesRegexp(self, exc, re_, fun, *args, **kwargs):
        with self.assertRaisesRegex(exc, re_):
            fun(*args, **kwargs)

    # silence deprec warnings about useless renames
    failUnless = BaseTestCase.assertTrue
    failIf = BaseTestCase.assertFalse
    failUnlessEqual = BaseTestCase.assertEqual
    failUnlessRaises = BaseTestCase.assertRaises
    failUnlessAlmostEqual = BaseTestCase.assertAlmostEqual
    failIfEqual = BaseTestCase.assertNotEqual


def unit(run=[], exitfirst=False):
    args = []

    if run:
        args.append("-k")
        args.append(" or ".join(run))

    if exitfirst:
        args.append("-x")

    args.append("tests")

    return pytest.main(args=args)
