"""Deterministic seed derivation for sampling components."""

from __future__ import annotations

import hashlib
from typing import Any, Optional

import numpy as np


class SeedManager:
    """Derives per-component seeds from a single master seed.

    Each component gets its own generator, so reproducibility does not depend
    on the order in which components draw random numbers.

    Usage:
        seed_mgr = SeedManager(42)
        rng = seed_mgr.create_generator("local_backend")
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed. If None, derived seeds are None and
                generators are seeded from OS entropy.
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a deterministic seed from the master seed and component ids.

        Args:
            *components: Identifiers (strings, integers, etc.) naming the
                component that needs a seed.

        Returns:
            Derived seed as a positive 32-bit integer, or None if no master seed.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()

        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value & 0x7FFFFFFF

    def create_generator(self, *components: Any) -> np.random.Generator:
        """Create a numpy Generator seeded with the derived seed.

        Args:
            *components: Component identifiers for seed derivation.

        Returns:
            New Generator, unseeded (OS entropy) if no master seed is set.
        """
        return np.random.default_rng(self.derive_seed(*components))
