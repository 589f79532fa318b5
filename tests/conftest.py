"""Shared fixtures: isolated service instances."""

import pytest

from donutwin.models.round import RoundStore
from donutwin.models.session import SessionStore
from donutwin.services.credits_service import CreditsService
from donutwin.services.round_service import RoundService


@pytest.fixture
def round_service():
    return RoundService(SessionStore(), RoundStore(), starting_balance=1000)


@pytest.fixture
def credits_service(round_service):
    return CreditsService(round_service)
