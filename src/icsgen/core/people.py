"""Fake people for meeting organizers and attendees."""

import random
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from icsgen.config.constants import (
    DEFAULT_FIRST_NAMES,
    DEFAULT_LAST_NAMES,
    EMAIL_DOMAIN,
    EMAIL_SEPARATORS,
    NAME_ATTEMPTS,
    PEOPLE_POOL_SIZE,
)

NON_NAME_CHARS = re.compile(r"[^a-z ]")
# "first middle last" -> "f" + "last"
SHORTEN_PATTERN = re.compile(r"(?<=.).* ")


@dataclass(frozen=True)
class Person:
    name: str
    email: str


class PeoplePool:
    """A small pool of fake people, filled on first use."""

    def __init__(
        self,
        rng: random.Random,
        first_names: Optional[Sequence[str]] = None,
        last_names: Optional[Sequence[str]] = None,
        size: int = PEOPLE_POOL_SIZE,
    ):
        self.rng = rng
        self.first_names = list(first_names or DEFAULT_FIRST_NAMES)
        self.last_names = list(last_names or DEFAULT_LAST_NAMES)
        self.size = size
        self.people: List[Person] = []

    def random_name(self) -> str:
        """Pick a name, avoiding parts already used in the pool when possible."""
        parts = []
        for candidates in (self.first_names, self.last_names):
            part = self.rng.choice(candidates)
            attempts = 1
            while attempts < NAME_ATTEMPTS and any(part in p.name for p in self.people):
                part = self.rng.choice(candidates)
                attempts += 1
            parts.append(part)
        return " ".join(parts)

    def random_email(self, name: Optional[str] = None) -> str:
        """Derive an e-mail address from a name."""
        if not name:
            name = self.random_name()

        local = NON_NAME_CHARS.sub("", name.lower())
        if self.rng.random() < 0.5:
            local = SHORTEN_PATTERN.sub("", local, count=1)
        separator = self.rng.choice(EMAIL_SEPARATORS)
        return f"{local.replace(' ', separator)}@{EMAIL_DOMAIN}"

    def _fill(self) -> None:
        while len(self.people) < self.size:
            name = self.random_name()
            self.people.append(Person(name=name, email=self.random_email(name)))

    def random_person(self) -> Person:
        if not self.people:
            self._fill()
        return self.rng.choice(self.people)

    def random_people(self, count: int) -> List[Person]:
        """Return ``count`` people with distinct e-mail addresses.

        Args:
            count: Number of people wanted.

        Returns:
            Distinct people, at most as many as the pool has distinct e-mails.
        """
        if not self.people:
            self._fill()
        count = min(count, len({p.email for p in self.people}))

        chosen: List[Person] = []
        while len(chosen) < count:
            person = self.random_person()
            if any(p.email == person.email for p in chosen):
                continue
            chosen.append(person)
        return chosen
