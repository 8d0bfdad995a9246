"""Base generator class for identifier generators."""

from __future__ import annotations

from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for generators.

    Each generator owns its Faker instance and seeds it per instance, so
    generators never draw from or reseed the process-global random source.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility. ``None`` seeds from system entropy.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.seed = seed
        self.fake = Faker(locale)
        self.fake.seed_instance(seed)
