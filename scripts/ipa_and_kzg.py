#!/usr/bin/env python3
"""
End-to-end demo: commit one random polynomial under KZG and IPA, prove the two commitments
are equivalent, then verify.

    python scripts/ipa_and_kzg.py --max-degree 20 --seed 7
    python scripts/ipa_and_kzg.py --mismatch     # commit a different polynomial under IPA

Exit status is 0 iff the proof verifies.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import random
import secrets
import sys
import time

ROOT = pathlib.Path(__file__).resolve().parents[1]  # repo root (flat modules)
sys.path.insert(0, str(ROOT))

import config  # noqa: E402
from equivalence import PolyCommitEquivalence  # noqa: E402
from errors import EquivalenceError  # noqa: E402
from ipa import InnerProductArgPC  # noqa: E402
from kzg import SonicKZG  # noqa: E402
from pcs import LabeledPolynomial  # noqa: E402
from polynomials import UniPoly  # noqa: E402

logger = logging.getLogger("ipa_and_kzg")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--max-degree", type=int, default=20, help="supported degree of both backends (default: 20)")
    ap.add_argument("--hiding-bound", type=int, default=1, help="hiding bound for both commitments (0: none)")
    ap.add_argument("--seed", type=int, default=None, help="seed a deterministic rng (default: OS CSPRNG)")
    ap.add_argument("--mismatch", action="store_true", help="commit a different polynomial under IPA")
    ap.add_argument("--parallel", action="store_true", default=None, help="run backend calls on two threads")
    ap.add_argument(
        "--log-level", default=config.log_level_default(), help="logging level (default: $PC_EQUIV_LOG_LEVEL or WARNING)"
    )
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    rng = secrets.SystemRandom() if args.seed is None else random.Random(args.seed)
    kzg, ipa = SonicKZG(), InnerProductArgPC()
    max_degree = int(args.max_degree)

    def labeled(label):
        return LabeledPolynomial(label, UniPoly.random(max_degree - 1, rng), max_degree, args.hiding_bound or None)

    poly = labeled("poly")
    other = labeled("other") if args.mismatch else poly

    t0 = time.perf_counter()
    kzg_ck, kzg_vk = kzg.trim(kzg.setup(max_degree, rng), max_degree, args.hiding_bound)
    ipa_ck, ipa_vk = ipa.trim(ipa.setup(max_degree, rng), max_degree, args.hiding_bound)
    logger.info("setup done in %.2fs", time.perf_counter() - t0)

    kzg_commit, kzg_rand = kzg.commit(kzg_ck, poly, rng)
    ipa_commit, ipa_rand = ipa.commit(ipa_ck, other, rng)

    protocol = PolyCommitEquivalence(kzg, ipa, parallel=args.parallel)
    t0 = time.perf_counter()
    proof = protocol.prove((kzg_ck, ipa_ck), poly, (kzg_commit, ipa_commit), (kzg_rand, ipa_rand), rng)
    logger.info("prove done in %.2fs (%d bytes)", time.perf_counter() - t0, len(proof.to_bytes((kzg, ipa))))

    t0 = time.perf_counter()
    try:
        protocol.verify((kzg_vk, ipa_vk), (kzg_commit, ipa_commit), proof, rng)
    except EquivalenceError as exc:
        logger.info("verify done in %.2fs", time.perf_counter() - t0)
        print(f"The proof is not valid: {exc}")
        return 1
    logger.info("verify done in %.2fs", time.perf_counter() - t0)
    print("The proof is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
