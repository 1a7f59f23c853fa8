"""Tests for frame outputs."""

import shutil
from unittest.mock import MagicMock

import pytest

from controller import DmxController
from errors import TransportFailure
from output import LoopbackOutput, StreamingClientOutput, serialize
from output import streaming_client

from conftest import make_device


class TestSerialize:
    """Tests for the wire format."""

    def test_comma_separated(self):
        """Test that values are joined with commas."""
        assert serialize([255, 0, 12]) == "255,0,12"

    def test_empty(self):
        """Test that an empty frame is an empty string."""
        assert serialize([]) == ""

    def test_truncates_toward_zero(self):
        """Test truncation of fractional values."""
        assert serialize([1.9, -1.9, 0.5]) == "1,-1,0"


class TestLoopbackOutput:
    """Tests for the in-memory output."""

    def test_lines_are_terminated(self):
        """Test that each frame is one newline-terminated line."""
        output = LoopbackOutput()
        output.write([1, 2, 3])
        output.write([4.2, 5, 6])
        assert output.readline() == "1,2,3\n"
        assert output.readline() == "4,5,6\n"
        assert output.frames_written == 2
        output.close()

    def test_opened_lazily(self):
        """Test that the frame buffer is created by the first write."""
        output = LoopbackOutput()
        assert output.is_open is False
        output.write([0])
        assert output.is_open is True
        output.close()

    def test_close_is_idempotent(self):
        """Test that closing twice is fine."""
        output = LoopbackOutput()
        output.write([0])
        output.close()
        output.close()
        assert output.closed is True

    def test_write_after_close(self):
        """Test that a closed output refuses writes."""
        output = LoopbackOutput()
        output.close()
        with pytest.raises(TransportFailure):
            output.write([0])

    def test_unread_frames_never_block(self):
        """Test that frames pile up in memory with nobody reading them."""
        output = LoopbackOutput()
        frame = [255] * 512
        for _ in range(5000):
            output.write(frame)
        assert output.frames_written == 5000
        assert len(output.lines) == 5000
        output.close()

    def test_readline_when_drained(self):
        """Test that reading past the last frame gives an empty string."""
        output = LoopbackOutput()
        output.write([7])
        assert output.readline() == "7\n"
        assert output.readline() == ""

    def test_readline_before_write(self):
        """Test that reading before anything was written is an error."""
        with pytest.raises(TransportFailure):
            LoopbackOutput().readline()

    def test_frames_readable_after_close(self):
        """Test that closing keeps the frames already written."""
        output = LoopbackOutput()
        output.write([1, 2])
        output.close()
        assert output.readline() == "1,2\n"


def fake_process(stdin=None):
    process = MagicMock()
    process.pid = 1234
    process.returncode = 0
    process.stdin = stdin if stdin is not None else MagicMock()
    return process


class TestStreamingClientOutput:
    """Tests for the external process output."""

    def test_launched_on_first_write(self, monkeypatch):
        """Test that the command is split and launched once."""
        process = fake_process()
        popen = MagicMock(return_value=process)
        monkeypatch.setattr(streaming_client.subprocess, "Popen", popen)

        output = StreamingClientOutput("ola_streaming_client -u 1")
        assert popen.call_count == 0
        output.write([1, 2])
        output.write([3, 4])

        assert popen.call_count == 1
        args, kwargs = popen.call_args
        assert args[0] == ["ola_streaming_client", "-u", "1"]
        assert kwargs["stdin"] == streaming_client.subprocess.PIPE
        process.stdin.write.assert_any_call("1,2\n")
        process.stdin.write.assert_any_call("3,4\n")
        assert process.stdin.flush.call_count == 2

    def test_launch_failure(self, monkeypatch):
        """Test that a missing executable is a transport failure."""
        popen = MagicMock(side_effect=FileNotFoundError("no such file"))
        monkeypatch.setattr(streaming_client.subprocess, "Popen", popen)

        output = StreamingClientOutput("does_not_exist")
        with pytest.raises(TransportFailure):
            output.write([1])

    def test_broken_pipe(self, monkeypatch):
        """Test that a write to an exited process fails without retry."""
        stdin = MagicMock()
        stdin.flush.side_effect = BrokenPipeError("gone")
        process = fake_process(stdin)
        monkeypatch.setattr(streaming_client.subprocess, "Popen", MagicMock(return_value=process))

        output = StreamingClientOutput("ola_streaming_client -u 1")
        with pytest.raises(TransportFailure):
            output.write([1])
        assert stdin.write.call_count == 1
        assert output.frames_written == 0

    def test_close_reaps_process(self, monkeypatch):
        """Test that close shuts stdin and waits for the process."""
        process = fake_process()
        monkeypatch.setattr(streaming_client.subprocess, "Popen", MagicMock(return_value=process))

        output = StreamingClientOutput("ola_streaming_client -u 1")
        output.write([1])
        output.close()
        output.close()
        process.stdin.close.assert_called_once()
        process.wait.assert_called_once()

    def test_close_terminates_stuck_process(self, monkeypatch):
        """Test that a process ignoring EOF is terminated."""
        process = fake_process()
        process.wait.side_effect = [streaming_client.subprocess.TimeoutExpired("x", 2), 0]
        monkeypatch.setattr(streaming_client.subprocess, "Popen", MagicMock(return_value=process))

        output = StreamingClientOutput("ola_streaming_client -u 1")
        output.write([1])
        output.close()
        process.terminate.assert_called_once()

    def test_close_never_opened(self, monkeypatch):
        """Test that closing an unused output launches nothing."""
        popen = MagicMock()
        monkeypatch.setattr(streaming_client.subprocess, "Popen", popen)
        StreamingClientOutput("ola_streaming_client -u 1").close()
        popen.assert_not_called()

    @pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")
    def test_real_process(self, tmp_path):
        """Test streaming frames through a real child process."""
        target = tmp_path / "frames.txt"
        c = DmxController(cmd_template=f"sh -c 'cat > {target}'")
        c.attach(make_device())
        c.attach(make_device())
        c.instant(pan=255)
        c.instant(point="center")
        c.close()
        assert target.read_text() == "255,0,0,255,0,0\n127,127,0,127,127,0\n"
