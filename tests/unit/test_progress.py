"""
Unit tests for CheckoutProgress.
"""

from unittest.mock import MagicMock

from svnbridge.services.progress import CheckoutProgress


class TestCheckoutProgress:
    """Tests for checkout progress reporting."""

    def test_known_total(self):
        callback = MagicMock()
        progress = CheckoutProgress(callback, total_files=4)

        progress.on_output("stdout", "A    proj/a.txt\nA    proj/b.txt\n")

        assert callback.call_count == 2
        callback.assert_called_with("Checking out: b.txt (2/4)", 55)

    def test_last_file_reaches_end(self):
        callback = MagicMock()
        progress = CheckoutProgress(callback, total_files=2)

        progress.on_output("stdout", "A    a.txt\nA    b.txt\nA    extra.txt\n")

        assert progress.percent == 95

    def test_unknown_total_creeps_and_caps(self):
        callback = MagicMock()
        progress = CheckoutProgress(callback)

        progress.on_output("stdout", "".join(f"A    f{i}.txt\n" for i in range(200)))

        assert callback.call_args_list[0].args == ("Checking out: f0.txt", 16)
        assert progress.percent == 90
        assert progress.count == 200

    def test_lines_split_across_chunks(self):
        callback = MagicMock()
        progress = CheckoutProgress(callback, total_files=10)

        progress.on_output("stdout", "A    proj/do")
        progress.on_output("stdout", "cs/readme.md\n")

        callback.assert_called_once_with("Checking out: readme.md (1/10)", 23)

    def test_directory_name(self):
        callback = MagicMock()
        progress = CheckoutProgress(callback)

        progress.on_output("stdout", "A    proj/docs/\n")

        assert callback.call_args.args[0] == "Checking out: docs"

    def test_other_lines_ignored(self):
        callback = MagicMock()
        progress = CheckoutProgress(callback)

        progress.on_output("stdout", "Checked out revision 42.\n")
        progress.on_output("stderr", "A    not-a-file\n")

        callback.assert_not_called()

    def test_forwards_every_chunk(self):
        forward = MagicMock()
        progress = CheckoutProgress(MagicMock(), forward=forward)

        progress.on_output("stderr", "warning\n")

        forward.on_output.assert_called_once_with("stderr", "warning\n")
