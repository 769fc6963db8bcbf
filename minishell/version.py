"""Version and build information for minishell."""

import platform
from typing import List

VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_PATCH = 0
VERSION_PRERELEASE = ""

VERSION_SHORT = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
VERSION = f"{VERSION_SHORT}-{VERSION_PRERELEASE}" if VERSION_PRERELEASE else VERSION_SHORT

BUILD_INFO = (
    f"{platform.python_implementation()} {platform.python_version()} "
    f"on {platform.system() or 'unknown'}"
)


def version_lines(name: str = "minishell") -> List[str]:
    """Lines printed by the ``version`` built-in command."""
    return [
        f"{name} version: v{VERSION}",
        f"Build info: {BUILD_INFO}",
    ]
