"""Placeholder values for generated requests.

``FakeData`` draws from its own ``Faker`` instance, seeded with
``seed_instance`` so a seed makes every generated collection reproducible.
Pass a ``faker`` object to replace the generator entirely.
"""
from typing import Optional

from faker import Faker


class FakeData:
    def __init__(
        self,
        seed: Optional[int] = None,
        int_min: int = 0,
        int_max: int = 2 ** 53 - 1,
        faker=None,
    ):
        if faker is None:
            faker = Faker()
            if seed is not None:
                faker.seed_instance(seed)
        self.faker = faker
        self.int_min, self.int_max = int_min, int_max

    @classmethod
    def from_settings(cls, settings):
        return cls(
            seed=settings.fake_data_seed,
            int_min=settings.fake_int_min,
            int_max=settings.fake_int_max,
        )

    def word(self) -> str:
        return self.faker.word()

    def product_name(self) -> str:
        return self.faker.catch_phrase()

    def integer(self) -> int:
        return self.faker.random_int(min=self.int_min, max=self.int_max)
