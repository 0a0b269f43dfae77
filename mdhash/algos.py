from __future__ import annotations

import dataclasses
import os
from typing import Dict, List, Optional

from .core import Algorithm, Hasher
from .md4 import MD4
from .md5 import MD5
from .ripemd import RIPEMD128, RIPEMD160, RIPEMD256, RIPEMD320
from .sha1 import SHA1
from .sha2 import SHA224, SHA256, SHA384, SHA512, SHA512_224, SHA512_256

ALGORITHMS: Dict[str, Algorithm] = {
    alg.name: alg
    for alg in (
        MD4,
        MD5,
        SHA1,
        SHA224,
        SHA256,
        SHA384,
        SHA512,
        SHA512_224,
        SHA512_256,
        RIPEMD128,
        RIPEMD160,
        RIPEMD256,
        RIPEMD320,
    )
}

ENGINES = ("python", "numba", "auto")


def normalize_name(name: str) -> str:
    """
    Map user spellings onto registry names.

    "SHA-512/256" -> "sha512_256", "RIPEMD-160" -> "ripemd160", "rmd128" -> "ripemd128".
    """
    s = name.strip().lower().replace("-", "").replace("/", "_")
    if s.startswith("rmd"):
        s = "ripemd" + s[3:]
    return s


def get_algorithm(name: str | Algorithm) -> Algorithm:
    if isinstance(name, Algorithm):
        return name
    key = normalize_name(name)
    try:
        return ALGORITHMS[key]
    except KeyError:
        raise ValueError(f"unknown algorithm {name!r} (choose from {', '.join(ALGORITHMS)})") from None


def available() -> List[str]:
    return list(ALGORITHMS)


def resolve_engine(engine: Optional[str] = None) -> str:
    engine = (engine or os.getenv("MDHASH_ENGINE") or "python").strip().lower()
    if engine not in ENGINES:
        raise ValueError(f"unknown engine {engine!r} (choose from {', '.join(ENGINES)})")
    return engine


def with_engine(algorithm: Algorithm, engine: Optional[str] = None) -> Algorithm:
    """Return `algorithm` with its compression function swapped for the selected engine."""
    engine = resolve_engine(engine)
    if engine == "python":
        return algorithm

    from .jit import has_kernel, numba_available

    if not numba_available():
        if engine == "auto":
            return algorithm
        raise RuntimeError("numba is not available (pip install numba) or disabled via MDHASH_NO_NUMBA=1")
    if not has_kernel(algorithm.name):
        return algorithm

    from .jit import compressor

    return dataclasses.replace(algorithm, compress=compressor(algorithm.name))


def new(name: str | Algorithm, data: object = b"", engine: Optional[str] = None) -> Hasher:
    hasher = Hasher(with_engine(get_algorithm(name), engine))
    return hasher.update(data)


def digest(name: str | Algorithm, *inputs: object, engine: Optional[str] = None) -> bytes:
    with new(name, engine=engine) as hasher:
        for item in inputs:
            hasher.update(item)
        return hasher.digest()


def hexdigest(name: str | Algorithm, *inputs: object, engine: Optional[str] = None) -> str:
    return digest(name, *inputs, engine=engine).hex()
