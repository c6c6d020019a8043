"""Shared fixtures for peep tests."""

import pytest

from peep import less


@pytest.fixture(autouse=True)
def fresh_holder(monkeypatch: pytest.MonkeyPatch) -> less.ApplicationHolder:
    """Give every test its own application holder.

    The process-wide holder allows one ``activate()`` per process; tests
    each need their own.
    """
    holder = less.ApplicationHolder()
    monkeypatch.setattr(less, "_holder", holder)
    return holder
