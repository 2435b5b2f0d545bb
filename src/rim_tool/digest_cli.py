import argparse
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .digest import HashAlgorithm, hash_file, hash_value, verify_file_hash, verify_value_hash
from .settings import settings


def cmd_value(ns: argparse.Namespace) -> int:
    digest = hash_value(ns.text, ns.alg)
    if digest is None:
        return 2
    print(digest)
    return 0


def cmd_file(ns: argparse.Namespace) -> int:
    paths = [Path(p) for p in ns.paths]
    workers = max(1, ns.workers or settings.digest_workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        digests = list(pool.map(hash_file, paths))
    failures = 0
    for path, digest in zip(paths, digests):
        if not digest:
            failures += 1
            continue
        print(f"{digest}  {path}")
    if failures:
        logging.error("%d file(s) could not be digested", failures)
        return 1
    return 0


def cmd_check(ns: argparse.Namespace) -> int:
    ok = verify_file_hash(Path(ns.path), ns.expected)
    print("OK" if ok else "FAIL")
    return 0 if ok else 2


def cmd_check_value(ns: argparse.Namespace) -> int:
    ok = verify_value_hash(ns.text, ns.expected, ns.alg)
    print("OK" if ok else "FAIL")
    return 0 if ok else 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rim-digest", description="Digest values and files for RIM payloads")
    sub = p.add_subparsers(dest="cmd", required=True)

    value_p = sub.add_parser("value", help="Hex digest of a UTF-8 string")
    value_p.add_argument("text")
    value_p.add_argument("--alg", default=HashAlgorithm.SHA256.value,
                         help="256, 384 or 512 (SHA-256 style names also accepted)")
    value_p.set_defaults(func=cmd_value)

    file_p = sub.add_parser("file", help="Base64 SHA-256 of one or more files")
    file_p.add_argument("paths", nargs="+")
    file_p.add_argument("--workers", type=int, default=None, help="Parallel readers (default from settings)")
    file_p.set_defaults(func=cmd_file)

    check_p = sub.add_parser("check", help="Compare a file against an expected Base64 SHA-256")
    check_p.add_argument("path")
    check_p.add_argument("expected")
    check_p.set_defaults(func=cmd_check)

    check_value_p = sub.add_parser("check-value", help="Compare a string against an expected hex digest")
    check_value_p.add_argument("text")
    check_value_p.add_argument("expected")
    check_value_p.add_argument("--alg", default=HashAlgorithm.SHA256.value)
    check_value_p.set_defaults(func=cmd_check_value)

    return p


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    ns = build_parser().parse_args(argv)
    return ns.func(ns)


def run() -> None:  # pragma: no cover - console script shim
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
