"""Main entry point for the minishell console script.

Initializes logging in two phases (defaults then config-driven),
builds a shell with the built-in commands, and runs it in script mode
(``-f``) or interactive mode (the default).

Key functions:
    main: Parse arguments and run the selected mode; returns an exit code.
    run: Console-script wrapper around main().
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .logging_config import get_logger, setup_logging
from .version import VERSION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minishell",
        description="Run the minishell command shell interactively or from a script.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-f", "--file", type=Path, help="execute commands from a script file")
    mode.add_argument(
        "-i", "--interactive", action="store_true", help="start interactive mode (default)"
    )
    parser.add_argument("--config-dir", type=Path, help="directory holding settings.yaml")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the shell; returns 0 on success, 1 when a script cannot be opened."""
    args = build_parser().parse_args(argv)

    # Phase 1: defaults, cache_logger_on_first_use=False
    setup_logging()
    logger = get_logger()

    # Import here to ensure logging is configured first
    from .builtins import add_builtin_commands
    from .config import Config, get_config
    from .line_source import IterableLineSource, PromptToolkitLineSource
    from .shell import Shell, stdout_echo

    config = Config(args.config_dir) if args.config_dir else get_config()
    config.validate()

    # Phase 2: reconfigure with real config
    setup_logging(config)
    logger.info("minishell_starting", version=VERSION, shell=config.shell_name)

    shell: Shell[dict] = Shell(config.shell_name, echo=stdout_echo)
    shell.set_title(config.title)
    add_builtin_commands(shell, stdout_echo)
    host_context: dict = {}

    if args.file is not None:
        ok = shell.run_script_mode(args.file, host_context)
        return 0 if ok else 1

    if sys.stdin.isatty():
        line_source = PromptToolkitLineSource(config.history_file)
    else:
        line_source = IterableLineSource(sys.stdin)
    shell.run_interactive_mode(host_context, line_source)
    return 0


def run():
    """Synchronous entry point for the ``minishell`` console script."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
