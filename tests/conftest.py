import os

from hypothesis import HealthCheck, settings


# Every example builds a FLAC file or block in memory and parses it,
# so examples are cheap but the fuzzed scans vary a lot in length.
settings.register_profile(
    "flacmeta",
    max_examples=300,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow])

# CI runs the malformed-input tests much longer
settings.register_profile(
    "ci",
    parent=settings.get_profile("flacmeta"),
    max_examples=2000)

settings.register_profile(
    "quick",
    parent=settings.get_profile("flacmeta"),
    max_examples=20)

settings.load_profile(os.environ.get(
    "FLACMETA_HYPOTHESIS_PROFILE", "ci" if "CI" in os.environ else "flacmeta"))
