"""rim_tool package: command line core for building and inspecting Reference Integrity Manifests.

Manifest construction, schema validation and signature handling live in
collaborators that receive the parsed :class:`RimIntent`; this package owns the
command grammar and the digests embedded in or checked against a RIM.
"""
from .digest import HashAlgorithm, hash_file, hash_value, verify_file_hash  # noqa: F401
from .intent import Mode, RimIntent, UsageRequest  # noqa: F401
