# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Simple logging configuration using Python's standard logging with Rich.

Generated sources are written to stdout, so the Rich handler is bound to a
stderr console. Application code only ever asks for a module logger:

    import logging
    logger = logging.getLogger(__name__)
    logger.warning("volk_32f_foo does not have a generic protokernel, skipping.")
"""

import logging

LEVEL_MAP = {
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG
}


def setup_logging(level: str = "warning") -> None:
    """Configure Python logging with a Rich handler on stderr.

    Maps string level ('error', 'warning', 'info', 'debug') to logging constants.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    log_level = LEVEL_MAP.get(level.lower(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(log_level)

    if not root.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            markup=False,
            show_time=False
        )
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(log_level)
