# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Logging configuration for unitdiff.

Console output goes through rich, everything at DEBUG and above is also
written to a rotating log file in the per-user log directory.
"""

import contextlib
from datetime import datetime
from pathlib import Path

from loguru import logger
from rich.console import Console

from unitdiff.constants import LOG_DIR

# handler ids added by setup_logger, replaced on the next call
_sink_ids: list[int] = []


def setup_logger(
    run_name: str,
    debug: bool = False,
    silent: bool = False,
    console: Console | None = None,
    log_dir: Path | None = None,
) -> Path:
    """
    Set up logging for a run.

    Args:
        run_name: Name of the run, used in the log file name
        debug: Show DEBUG messages on the console
        silent: Do not log to the console at all
        console: Rich console to print to, stderr by default
        log_dir: Directory for the log file, the user log dir by default

    Returns:
        Path to the log file
    """
    # sinks added by the host application stay in place
    for sink_id in [*_sink_ids, 0]:
        with contextlib.suppress(ValueError):
            logger.remove(sink_id)
    _sink_ids.clear()

    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    logfile = log_dir / f"{run_name}_{timestamp}.log"

    if not silent:
        console = console or Console(stderr=True)

        def console_sink(message):
            text = message.record["message"].rstrip("\n")
            console.print(text, markup=False, highlight=False)

        sink_id = logger.add(
            console_sink,
            level="DEBUG" if debug else "INFO",
            format="{message}",
            catch=True,
        )
        _sink_ids.append(sink_id)

    sink_id = logger.add(
        logfile,
        level="DEBUG",
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>",
        rotation="10 MB",
        retention="14 days",
        catch=True,
    )
    _sink_ids.append(sink_id)

    logger.bind(run=run_name, logfile=str(logfile)).debug("Logger initialized")
    return logfile
