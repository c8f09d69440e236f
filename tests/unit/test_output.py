"""Unit tests for logging and envelope output."""

import json

from reddit_researcher.utils.output import (
    error_envelope,
    handle_output,
    log,
    ok_envelope,
)


class TestLog:
    """Tests for the stderr logger."""

    def test_prefix_on_stderr(self, capsys):
        log("Searching r/shopify")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[reddit-researcher] Searching r/shopify" in captured.err

    def test_emoji_codes_printed_verbatim(self, capsys):
        log('Searching r/shopify for ":fire: app"')
        assert '[reddit-researcher] Searching r/shopify for ":fire: app"' in capsys.readouterr().err


class TestHandleOutput:
    """Tests for handle_output."""

    def test_ok_returns_zero(self, capsys):
        assert handle_output(ok_envelope({"count": 0})) == 0
        assert json.loads(capsys.readouterr().out) == {"ok": True, "data": {"count": 0}}

    def test_error_returns_one(self, capsys):
        assert handle_output(error_envelope("nope")) == 1
        assert json.loads(capsys.readouterr().out) == {"ok": False, "error": "nope"}

    def test_unwritable_output_file_becomes_error(self, tmp_path, capsys):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        target = blocker / "out.json"

        code = handle_output(ok_envelope({"count": 0}), str(target))

        captured = capsys.readouterr()
        assert code == 1
        assert json.loads(captured.out)["ok"] is False
        assert f"Failed to save output to {target}" in captured.err
        assert not target.exists()
