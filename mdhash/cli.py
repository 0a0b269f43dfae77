from __future__ import annotations

import argparse
from typing import List

from .algos import ALGORITHMS, ENGINES, get_algorithm, new, resolve_engine


def cmd_verify(ns: argparse.Namespace) -> int:
    from .verify import VECTORS, run_vectors

    vectors = VECTORS
    if ns.algorithm:
        names = {get_algorithm(a).name for a in ns.algorithm}
        vectors = [v for v in VECTORS if v.algorithm in names]

    ok_all = True
    for res in run_vectors(vectors, engine=ns.engine, max_bytes=ns.max_bytes):
        v = res.vector
        if res.skipped:
            print(f"{v.algorithm}({v.describe()}) -> SKIP")
            continue
        status = "OK" if res.ok else "FAIL"
        print(f"{v.algorithm}({v.describe()}) -> {status}")
        if not res.ok:
            print(f"  ours={res.actual}\n  ref ={v.expected}")
            ok_all = False
    print("verify:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def _message(ns: argparse.Namespace) -> bytes:
    if ns.hex is not None:
        try:
            return bytes.fromhex(ns.hex)
        except ValueError:
            raise ValueError("--hex must be an even number of hex characters") from None
    return " ".join(ns.text).encode("utf-8")


def cmd_hash(ns: argparse.Namespace) -> int:
    data = _message(ns)
    hasher = new(ns.algorithm, engine=ns.engine)
    if ns.repeat != 1:
        hasher.update_repeat(ns.repeat, data)
    else:
        hasher.update(data)
    print(hasher.hexdigest())
    return 0


def cmd_hmac(ns: argparse.Namespace) -> int:
    from .hmac import HMAC

    if ns.hex_key:
        key = bytes.fromhex(ns.key)
    else:
        key = ns.key.encode("utf-8")
    with HMAC(key, ns.algorithm, " ".join(ns.message).encode("utf-8"), engine=ns.engine) as mac:
        print(mac.hexdigest())
    return 0


def cmd_list(_: argparse.Namespace) -> int:
    for name, alg in ALGORITHMS.items():
        print(f"{name:<11} digest={alg.digest_size:>2} block={alg.block_size:>3} word={alg.word_bits}")
    return 0


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="mdhash")
    p.add_argument("--engine", choices=ENGINES, default=None, help="compression kernels (default: $MDHASH_ENGINE or python)")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify", help="check every algorithm against the published test vectors")
    s1.add_argument("--max-bytes", type=int, default=1_000_000, help="skip vectors longer than this (0 = no limit)")
    s1.add_argument("--algorithm", "-a", action="append", default=None, help="restrict to an algorithm (repeatable)")
    s1.set_defaults(func=cmd_verify)

    s2 = sub.add_parser("hash", help="print the hex digest of a message")
    s2.add_argument("algorithm")
    s2.add_argument("text", nargs="*", help="message text (joined with spaces)")
    s2.add_argument("--hex", type=str, default=None, help="message given as hex instead of text")
    s2.add_argument("--repeat", type=int, default=1, help="hash the message repeated N times")
    s2.set_defaults(func=cmd_hash)

    s3 = sub.add_parser("hmac", help="print the HMAC of a message")
    s3.add_argument("algorithm")
    s3.add_argument("key")
    s3.add_argument("message", nargs="*")
    s3.add_argument("--hex-key", action="store_true", help="key given as hex")
    s3.set_defaults(func=cmd_hmac)

    s4 = sub.add_parser("list", help="list supported algorithms")
    s4.set_defaults(func=cmd_list)

    # text after the options lands in the leftovers; fold it back into the message
    args, extra = p.parse_known_args(argv)
    if extra:
        field = {"hash": "text", "hmac": "message"}.get(args.cmd)
        if field is None or any(e.startswith("--") for e in extra):
            p.error(f"unrecognized arguments: {' '.join(extra)}")
        setattr(args, field, list(getattr(args, field) or []) + extra)
    if getattr(args, "max_bytes", None) == 0:
        args.max_bytes = None
    try:
        args.engine = resolve_engine(args.engine)
        return int(args.func(args))
    except (ValueError, RuntimeError) as exc:
        print(f"{args.cmd}: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
