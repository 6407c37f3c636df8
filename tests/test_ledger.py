"""Tests for consent ledger operations."""

import random

from kindrid.domain.photos import Photo
from kindrid.services import ledger


def _photo() -> Photo:
    children = ["Emma", "Lucas", "Ava"]
    return Photo(id="1", url="/1.jpg", children=children, consent_pending=children)


def test_grant_moves_name_to_given() -> None:
    photo = ledger.grant(_photo(), "Lucas")

    assert photo.consent_given == ["Lucas"]
    assert photo.consent_pending == ["Emma", "Ava"]
    assert not ledger.is_fully_resolved(photo)


def test_grant_is_idempotent() -> None:
    once = ledger.grant(_photo(), "Emma")
    twice = ledger.grant(once, "Emma")

    assert twice.consent_given == once.consent_given
    assert twice.consent_pending == once.consent_pending


def test_revoke_is_idempotent() -> None:
    photo = ledger.revoke(_photo(), "Emma")

    assert photo.consent_pending == ["Emma", "Lucas", "Ava"]
    assert photo.consent_given == []


def test_every_child_stays_in_exactly_one_set() -> None:
    rng = random.Random(3)
    photo = _photo()
    for _ in range(200):
        name = rng.choice(photo.children)
        operation = rng.choice([ledger.grant, ledger.revoke])
        photo = operation(photo, name)

        assert not set(photo.consent_given) & set(photo.consent_pending)
        for child in photo.children:
            memberships = (child in photo.consent_given) + (
                child in photo.consent_pending
            )
            assert memberships == 1


def test_fully_resolved_after_all_granted() -> None:
    photo = _photo()
    for name in photo.children:
        photo = ledger.grant(photo, name)

    assert ledger.is_fully_resolved(photo)


def test_repartition_keeps_decisions_for_remaining_names() -> None:
    photo = ledger.grant(_photo(), "Emma")

    photo = ledger.repartition(photo, ["Emma", "Mia"])

    assert photo.children == ["Emma", "Mia"]
    assert photo.consent_given == ["Emma"]
    assert photo.consent_pending == ["Mia"]
