"""Logging configuration for minishell.

Provides subsystem-level log file routing and structlog + stdlib
integration. Console output goes to stderr so it never mixes with
the shell's own output on stdout.

Subsystem hierarchy (stdlib dotted names, structlog wraps them):
    root                     → StreamHandler (stderr)
      └─ minishell           → RotatingFileHandler → minishell.log (combined)
           ├─ minishell.registry    → RFH → registry.log
           ├─ minishell.dispatch    → RFH → dispatch.log
           ├─ minishell.script      → RFH → script.log
           └─ minishell.interactive → RFH → interactive.log

File handlers are only installed when a log directory is configured.
"""

import logging
import logging.handlers
import sys

import structlog

# Subsystem names, each with its own RotatingFileHandler
SUBSYSTEMS = ("registry", "dispatch", "script", "interactive")

# stdlib logger name prefix for hierarchy-based propagation
LOGGER_PREFIX = "minishell"


def get_logger(name: str = LOGGER_PREFIX) -> structlog.stdlib.BoundLogger:
    """structlog logger routed through the stdlib logger called ``name``.

    Events always go through stdlib logging, even before setup_logging()
    runs, so an embedding host only sees warnings (stdlib's last-resort
    handler on stderr) until it configures logging.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def _level(name: str, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback) if name else fallback


def setup_logging(config=None) -> None:
    """Configure structured logging with optional subsystem file handlers.

    Args:
        config: Optional Config instance. The first call (before config
            loads) uses console-only defaults with
            cache_logger_on_first_use=False. The second call uses the
            real config and caches loggers.
    """
    if config is not None:
        log_dir = config.log_dir
        file_level = _level(config.logging_level, logging.INFO)
        console_level = _level(config.logging_console_level, logging.WARNING)
        subsystem_levels = config.logging_subsystem_levels
        max_bytes = config.logging_max_file_size_mb * 1024 * 1024
        backup_count = config.logging_backup_count
        cache_loggers = True
    else:
        log_dir = None
        file_level = logging.INFO
        console_level = logging.WARNING
        subsystem_levels = {}
        max_bytes = 10 * 1024 * 1024  # 10 MB
        backup_count = 5
        cache_loggers = False

    # --- File handler setup (may fail on permissions/disk) ---
    file_handlers_ok = False
    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handlers_ok = True
        except OSError as exc:
            # Fall back to console-only logging
            print(
                f"WARNING: Cannot create log directory {log_dir}: {exc}. "
                "Falling back to console-only logging.",
                file=sys.stderr,
            )

    file_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )

    # 1. Root logger: console only
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers filter by level
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root_logger.addHandler(console_handler)

    # 2. "minishell" parent logger: combined log file
    ms_logger = logging.getLogger(LOGGER_PREFIX)
    ms_logger.setLevel(logging.DEBUG)
    ms_logger.handlers.clear()
    ms_logger.propagate = True  # → root → console

    if file_handlers_ok:
        combined_handler = logging.handlers.RotatingFileHandler(
            log_dir / "minishell.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        combined_handler.setLevel(file_level)
        combined_handler.setFormatter(file_formatter)
        ms_logger.addHandler(combined_handler)

    # 3. Per-subsystem loggers
    for subsystem in SUBSYSTEMS:
        sub_logger = logging.getLogger(f"{LOGGER_PREFIX}.{subsystem}")
        sub_level = _level(subsystem_levels.get(subsystem, ""), file_level)
        sub_logger.setLevel(min(sub_level, console_level))
        sub_logger.handlers.clear()
        sub_logger.propagate = True  # → "minishell" → root

        if file_handlers_ok:
            sub_handler = logging.handlers.RotatingFileHandler(
                log_dir / f"{subsystem}.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            sub_handler.setLevel(sub_level)
            sub_handler.setFormatter(file_formatter)
            sub_logger.addHandler(sub_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )
