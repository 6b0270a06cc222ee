"""Base generator class for synthetic input data."""

from __future__ import annotations

from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``pt_BR``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "pt_BR",
    ) -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
        # Faker's own Random, seeded together with the instance
        self.random = self.fake.random
