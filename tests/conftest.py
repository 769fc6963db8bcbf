"""Shared fixtures for minishell tests."""

from unittest.mock import MagicMock

import pytest

from minishell.command import Command, CommandOption, OptionValueType
from minishell.shell import Shell


@pytest.fixture
def echoed():
    """List collecting every line written to the echo sink."""
    return []


@pytest.fixture
def shell(echoed):
    return Shell("testshell", echo=echoed.append)


@pytest.fixture
def read_arch():
    return Command(
        name="read_arch",
        options=[
            CommandOption(
                name="file",
                short_name="f",
                require_value=True,
                mandatory=True,
                description="Architecture file",
            ),
            CommandOption(name="verbose", description="Print details"),
            CommandOption(
                name="jobs",
                short_name="j",
                require_value=True,
                value_type=OptionValueType.INT,
            ),
        ],
    )


@pytest.fixture
def spy():
    """Execute function spy; assert on its calls."""
    return MagicMock(name="execute")
