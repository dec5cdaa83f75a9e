from datetime import timedelta

import pytest

from billing_engine.domain.enums import CollectionAction, CollectionMethod
from billing_engine.domain.models import CollectionAttempt
from billing_engine.engine.collection_advisor import CollectionPolicy, next_collection_action


def attempt(method, now, days_ago, **kw):
    return CollectionAttempt(method=method, date=now - timedelta(days=days_ago), **kw)


def test_no_attempts_suggests_email(fixed_now):
    advice = next_collection_action([], fixed_now)

    assert advice == CollectionAction.EMAIL
    assert advice.label == "Send email reminder"


@pytest.mark.parametrize(
    "method, days_ago, expected",
    [
        ("email", 6, CollectionAction.WAIT),
        ("email", 7, CollectionAction.PHONE),
        ("phone", 13, CollectionAction.WAIT),
        ("phone", 14, CollectionAction.LETTER),
        ("letter", 14, CollectionAction.LEGAL_NOTICE),
        ("legal_notice", 10, CollectionAction.WAIT),
        ("legal_notice", 20, CollectionAction.DEBT_COLLECTION),
        ("debt_collection", 90, CollectionAction.WAIT),
        ("carrier_pigeon", 90, CollectionAction.WAIT),
    ],
)
def test_escalation_ladder(fixed_now, method, days_ago, expected):
    assert next_collection_action([attempt(method, fixed_now, days_ago)], fixed_now) == expected


def test_only_most_recent_attempt_counts(fixed_now):
    attempts = [
        attempt("email", fixed_now, 30),
        attempt("phone", fixed_now, 2),
    ]

    assert next_collection_action(attempts, fixed_now) == CollectionAction.WAIT


def test_partial_days_are_floored(fixed_now):
    a = CollectionAttempt(method="email", date=fixed_now - timedelta(days=6, hours=23))

    assert next_collection_action([a], fixed_now) == CollectionAction.WAIT


def test_enum_method_is_accepted(fixed_now):
    a = attempt(CollectionMethod.LETTER, fixed_now, 15, result="no response")

    assert next_collection_action([a], fixed_now) == CollectionAction.LEGAL_NOTICE


def test_custom_policy(fixed_now):
    policy = CollectionPolicy(email_followup_days=3, escalation_days=10)

    assert next_collection_action([attempt("email", fixed_now, 3)], fixed_now, policy=policy) == CollectionAction.PHONE
    assert next_collection_action([attempt("phone", fixed_now, 10)], fixed_now, policy=policy) == CollectionAction.LETTER


def test_wait_label():
    assert CollectionAction.WAIT.label == "Wait before next action"
