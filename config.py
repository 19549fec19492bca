"""Protocol parameters and runtime settings.

Protocol parameters are fixed constants: changing any of them changes every derived
challenge, so prover and verifier must agree on them. Runtime settings only affect how
the work is scheduled or reported and are read from the environment.
"""

import os  # env-driven runtime settings

# Protocol parameters.
TRANSCRIPT_SEED = b""  # domain separator for the equivalence transcript (empty, as in the original protocol)
COMMITMENT_LABEL = b"commitment"  # label for each absorbed commitment (commitment 1, then commitment 2)
IPA_GENERATOR_DOMAIN = b"PC_EQUIV_IPA_GENERATORS"  # hash-to-curve domain for IPA Pedersen bases
IPA_ORACLE_LABEL = b"ipa_pc"  # seed of the IPA backend's internal random oracle

# Runtime settings.
PARALLEL_ENV = "PC_EQUIV_PARALLEL"  # "1" runs the two backend calls on separate threads
LOG_LEVEL_ENV = "PC_EQUIV_LOG_LEVEL"  # default level for the demo driver


def parallel_default():  # Parse PC_EQUIV_PARALLEL (unset/"0"/"false" -> sequential).
    return os.environ.get(PARALLEL_ENV, "0").strip().lower() in ("1", "true", "yes", "on")


def log_level_default():
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
