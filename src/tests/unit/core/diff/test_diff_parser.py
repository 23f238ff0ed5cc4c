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

import pytest

from unitdiff.core.diff.diff_parser import DiffParser

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def git_diff_text():
    return "\n".join(
        [
            "diff --git a/UserService.java b/UserService.java",
            "index 123..456 100644",
            "--- a/UserService.java",
            "+++ b/UserService.java",
            "@@ -3,0 +4,2 @@ public class UserService {",
            "+    private int count;",
            "+",
            "@@ -20,2 +22 @@ public void create() {",
            "-        save();",
            "-        log();",
            "+        saveAll();",
            "",
        ]
    )


# -----------------------------------------------------------------------------
# Hunk bookkeeping
# -----------------------------------------------------------------------------


def test_counters_follow_context_added_and_removed_lines():
    diff = "@@ -10,3 +10,4 @@\n ctx1\n+added1\n ctx2\n-removed1\n ctx3"

    parsed = DiffParser.parse(diff)

    assert len(parsed) == 1
    hunk = parsed.hunks[0]
    # ctx1 is old 10/new 10, added1 is new 11, ctx2 is old 11/new 12,
    # removed1 is old 12
    assert dict(hunk.added_lines) == {11: "added1"}
    assert dict(hunk.removed_lines) == {12: "removed1"}


def test_parses_git_output_with_metadata(git_diff_text):
    parsed = DiffParser.parse(git_diff_text)

    assert len(parsed) == 2
    first, second = parsed.hunks

    assert dict(first.added_lines) == {4: "    private int count;", 5: ""}
    assert dict(first.removed_lines) == {}
    assert (first.old_start, first.old_len, first.new_start, first.new_len) == (
        3,
        0,
        4,
        2,
    )

    assert dict(second.removed_lines) == {20: "        save();", 21: "        log();"}
    assert dict(second.added_lines) == {22: "        saveAll();"}


def test_missing_length_defaults_to_one():
    parsed = DiffParser.parse("@@ -7 +7 @@\n-old\n+new\n")

    hunk = parsed.hunks[0]
    assert hunk.old_len == 1
    assert hunk.new_len == 1
    assert dict(hunk.removed_lines) == {7: "old"}
    assert dict(hunk.added_lines) == {7: "new"}


def test_added_lines_stay_inside_declared_new_range(git_diff_text):
    for hunk in DiffParser.parse(git_diff_text):
        for line in hunk.added_lines:
            assert hunk.new_start <= line < hunk.new_start + hunk.new_len
        for line in hunk.removed_lines:
            assert hunk.old_start <= line < hunk.old_start + hunk.old_len


def test_counters_restart_at_each_header():
    diff = "@@ -1 +1 @@\n-a\n+b\n@@ -50 +50 @@\n-c\n+d\n"

    first, second = DiffParser.parse(diff).hunks

    assert dict(first.added_lines) == {1: "b"}
    assert dict(second.added_lines) == {50: "d"}
    assert dict(second.removed_lines) == {50: "c"}


def test_new_file_hunk_starts_at_line_one():
    diff = "--- /dev/null\n+++ b/new.py\n@@ -0,0 +1,3 @@\n+a = 1\n+b = 2\n+c = 3\n"

    hunk = DiffParser.parse(diff).hunks[0]

    assert dict(hunk.added_lines) == {1: "a = 1", 2: "b = 2", 3: "c = 3"}
    assert dict(hunk.removed_lines) == {}


# -----------------------------------------------------------------------------
# Edge cases
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("text", ["", None, "not a diff at all\n+looks added\n"])
def test_empty_or_headerless_input_has_no_hunks(text):
    parsed = DiffParser.parse(text)

    assert len(parsed) == 0
    assert parsed.is_only_whitespace()


def test_lines_before_first_header_are_ignored():
    diff = "+stray\n-stray\n@@ -1 +1 @@\n+kept\n"

    hunk = DiffParser.parse(diff).hunks[0]

    assert dict(hunk.added_lines) == {1: "kept"}
    assert dict(hunk.removed_lines) == {}


def test_header_without_body_is_an_empty_hunk():
    parsed = DiffParser.parse("@@ -4,0 +5,0 @@\n@@ -9 +9 @@\n+x\n")

    assert len(parsed) == 2
    assert parsed.hunks[0].is_empty()
    assert dict(parsed.hunks[1].added_lines) == {9: "x"}


def test_no_newline_marker_does_not_advance_counters():
    diff = "@@ -1 +1,2 @@\n-old\n\\ No newline at end of file\n+new\n+newer\n"

    hunk = DiffParser.parse(diff).hunks[0]

    assert dict(hunk.removed_lines) == {1: "old"}
    assert dict(hunk.added_lines) == {1: "new", 2: "newer"}


def test_malformed_header_makes_its_body_inert():
    diff = "@@ -1 +1 @@\n+good\n@@ -x,y +z @@\n+ignored\n@@ -30 +30 @@\n+later\n"

    parsed = DiffParser.parse(diff)

    assert len(parsed) == 2
    assert dict(parsed.hunks[0].added_lines) == {1: "good"}
    assert dict(parsed.hunks[1].added_lines) == {30: "later"}


def test_crlf_line_endings_are_stripped():
    hunk = DiffParser.parse("@@ -1 +1 @@\r\n-a\r\n+b\r\n").hunks[0]

    assert dict(hunk.removed_lines) == {1: "a"}
    assert dict(hunk.added_lines) == {1: "b"}


def test_parsing_is_idempotent(git_diff_text):
    assert DiffParser.parse(git_diff_text) == DiffParser.parse(git_diff_text)
