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

from io import StringIO

import pytest
from loguru import logger
from rich.console import Console

from unitdiff.core.data.code_block import CodeBlock, FileReview, ReviewPayload
from unitdiff.core.logging.logging import setup_logger
from unitdiff.core.logging.utils import log_payload, time_block


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


def _console():
    return Console(file=StringIO(), width=200, color_system=None)


def test_console_shows_info_and_file_keeps_debug(tmp_path):
    console = _console()

    logfile = setup_logger("review", console=console, log_dir=tmp_path)
    logger.debug("parsed 3 hunks")
    logger.info("Skipping whitespace-only changes in 'Foo.java'")
    logger.remove()

    output = console.file.getvalue()
    assert "Skipping whitespace-only changes in 'Foo.java'" in output
    assert "parsed 3 hunks" not in output

    assert logfile.parent == tmp_path
    assert logfile.name.startswith("review_")
    log_text = logfile.read_text(encoding="utf-8")
    assert "parsed 3 hunks" in log_text
    assert "Skipping whitespace-only changes" in log_text


def test_debug_console(tmp_path):
    console = _console()

    setup_logger("review", debug=True, console=console, log_dir=tmp_path)
    logger.debug("parsed 3 hunks")

    assert "parsed 3 hunks" in console.file.getvalue()


def test_silent_only_writes_the_file(tmp_path):
    console = _console()

    logfile = setup_logger("review", silent=True, console=console, log_dir=tmp_path)
    logger.warning("git fetch failed, continuing with local refs")
    logger.remove()

    assert console.file.getvalue() == ""
    assert "git fetch failed" in logfile.read_text(encoding="utf-8")


def test_time_block_and_payload_logging(tmp_path):
    console = _console()
    setup_logger("review", debug=True, console=console, log_dir=tmp_path)
    payload = ReviewPayload(
        reviews=[FileReview("a.py", (CodeBlock("import", "import os"),))]
    )

    with time_block("unit extraction"):
        log_payload("unit extraction", payload)

    output = console.file.getvalue()
    assert "Starting unit extraction" in output
    assert "Finished unit extraction. Timing(ms)=" in output
    assert "unit extraction: files=1 blocks=1 failures=0" in output


def test_host_sinks_survive_setup(tmp_path):
    host_messages = []
    logger.add(host_messages.append, level="INFO", format="{message}")

    setup_logger("review", console=_console(), log_dir=tmp_path)
    logger.info("Skipping whitespace-only changes in 'Foo.java'")

    assert [m.strip() for m in host_messages] == [
        "Skipping whitespace-only changes in 'Foo.java'"
    ]


def test_repeated_setup_replaces_its_own_sinks(tmp_path):
    first = _console()
    second = _console()

    setup_logger("review", console=first, log_dir=tmp_path)
    setup_logger("review", console=second, log_dir=tmp_path)
    logger.info("2 files could not be extracted")

    assert first.file.getvalue() == ""
    assert second.file.getvalue().count("2 files could not be extracted") == 1
