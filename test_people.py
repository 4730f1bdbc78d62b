import random
import re

import pytest

from icsgen.core.people import PeoplePool, Person


@pytest.fixture
def pool() -> PeoplePool:
    return PeoplePool(random.Random(11))


def test_pool_fills_lazily(pool: PeoplePool) -> None:
    assert pool.people == []

    pool.random_person()

    assert len(pool.people) == 10


def test_emails_are_derived_from_names(pool: PeoplePool) -> None:
    for _ in range(50):
        email = pool.random_email("Gassy O’Doodle")
        assert email in {
            "gassy.odoodle@example.com",
            "gassyodoodle@example.com",
            "gassy-odoodle@example.com",
            "godoodle@example.com",
        }


def test_random_email_without_name(pool: PeoplePool) -> None:
    assert re.fullmatch(r"[a-z.\-]+@example\.com", pool.random_email())


def test_random_people_are_distinct(pool: PeoplePool) -> None:
    for count in range(1, 6):
        people = pool.random_people(count)
        assert len(people) == count
        assert len({p.email for p in people}) == count


def test_random_people_count_is_capped() -> None:
    pool = PeoplePool(random.Random(5), first_names=["Ann"], last_names=["Lee"], size=3)

    people = pool.random_people(5)

    # three people, all named Ann Lee, may share addresses
    assert 1 <= len(people) <= 3
    assert len({p.email for p in people}) == len(people)


def test_names_prefer_unused_parts() -> None:
    pool = PeoplePool(random.Random(3))
    pool.random_person()

    firsts = [p.name.split(" ")[0] for p in pool.people]
    # 13 first names, 5 attempts each: collisions are possible but rare
    assert len(set(firsts)) >= 6


def test_person_is_a_value() -> None:
    assert Person("Ann Lee", "ann@example.com") == Person("Ann Lee", "ann@example.com")
