"""Tests for the infrastructure adapters.

``subprocess.run`` and ``shutil.which`` are mocked — no gpg or scp is
ever executed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from keyshare.exceptions import (
    KeyExportError,
    MissingArtifactError,
    SigningError,
    ToolNotFoundError,
    UploadError,
)
from keyshare.infra.artifacts import LocalArtifactStore
from keyshare.infra.gpg import GpgKeyService, GpgSigningService
from keyshare.infra.process import run_tool
from keyshare.infra.scp import ScpRemoteCopy
from keyshare.infra.tool_detector import (
    ToolStatus,
    _platform_install_commands,
    detect_tool,
    require_tool,
)


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    result = MagicMock(spec=subprocess.CompletedProcess)
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


# ---------------------------------------------------------------------------
# run_tool
# ---------------------------------------------------------------------------

class TestRunTool:
    @patch("keyshare.infra.process.subprocess.run")
    def test_returns_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="listing\n")
        out = run_tool(["gpg", "--fingerprint", "X"], error_cls=KeyExportError, action="list")
        assert out == "listing\n"
        mock_run.assert_called_once_with(
            ["gpg", "--fingerprint", "X"],
            capture_output=True,
            text=True,
            check=False,
        )

    @patch("keyshare.infra.process.subprocess.run")
    def test_nonzero_exit_preserves_status(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=2, stderr="gpg: error reading key")
        with pytest.raises(KeyExportError) as exc_info:
            run_tool(["gpg", "--fingerprint", "X"], error_cls=KeyExportError, action="list")
        assert exc_info.value.exit_status == 2
        assert "error reading key" in str(exc_info.value)

    @patch("keyshare.infra.process.subprocess.run")
    def test_missing_executable(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = FileNotFoundError("gpg")
        with pytest.raises(ToolNotFoundError, match="gpg"):
            run_tool(["gpg"], error_cls=KeyExportError, action="list")

    @patch("keyshare.infra.process.subprocess.run")
    def test_uncaptured_returns_empty(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout=None)  # type: ignore[arg-type]
        assert run_tool(["scp"], error_cls=UploadError, action="copy", capture=False) == ""
        assert mock_run.call_args.kwargs["capture_output"] is False


# ---------------------------------------------------------------------------
# GnuPG adapters
# ---------------------------------------------------------------------------

class TestGpgServices:
    @patch("keyshare.infra.process.subprocess.run")
    def test_fingerprint_command(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="pub ed25519\n")
        assert GpgKeyService().fingerprint("ABCD1234") == "pub ed25519\n"
        assert mock_run.call_args.args[0] == ["gpg", "--fingerprint", "ABCD1234"]

    @patch("keyshare.infra.process.subprocess.run")
    def test_export_command(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed()
        GpgKeyService("gpg2").export_public_key("ABCD1234", tmp_path / "ABCD1234.pub")

        argv = mock_run.call_args.args[0]
        assert argv[0] == "gpg2"
        assert "--armor" in argv
        assert argv[argv.index("--output") + 1] == str(tmp_path / "ABCD1234.pub")
        assert argv[-2:] == ["--export", "ABCD1234"]

    @patch("keyshare.infra.process.subprocess.run")
    def test_detach_sign_command(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed()
        source = tmp_path / "k.asc"
        signature = tmp_path / "k.asc.sig.asc"
        GpgSigningService().detach_sign("ABCD1234", source, signature)

        argv = mock_run.call_args.args[0]
        assert argv[argv.index("--output") + 1] == str(signature)
        assert argv[-2:] == ["--detach-sign", str(source)]
        assert "--armor" in argv

    @patch("keyshare.infra.process.subprocess.run")
    def test_detach_sign_uses_published_key(
        self, mock_run: MagicMock, tmp_path: Path,
    ) -> None:
        mock_run.return_value = _completed()
        GpgSigningService().detach_sign(
            "0123456789ABCDEF", tmp_path / "k.asc", tmp_path / "k.asc.sig.asc",
        )

        argv = mock_run.call_args.args[0]
        assert "--local-user" in argv
        assert argv[argv.index("--local-user") + 1] == "0123456789ABCDEF"
        assert argv.index("--local-user") < argv.index("--detach-sign")

    @patch("keyshare.infra.process.subprocess.run")
    def test_sign_failure_maps_to_signing_error(
        self, mock_run: MagicMock, tmp_path: Path,
    ) -> None:
        mock_run.return_value = _completed(returncode=2)
        with pytest.raises(SigningError) as exc_info:
            GpgSigningService().detach_sign("K", tmp_path / "a", tmp_path / "b")
        assert exc_info.value.exit_status == 2


# ---------------------------------------------------------------------------
# scp adapter
# ---------------------------------------------------------------------------

class TestScpRemoteCopy:
    @patch("keyshare.infra.process.subprocess.run")
    def test_single_invocation_with_all_paths(
        self, mock_run: MagicMock, tmp_path: Path,
    ) -> None:
        mock_run.return_value = _completed()
        files = [tmp_path / "k.asc", tmp_path / "k.asc.sig.asc"]
        ScpRemoteCopy().copy(files, "alice@web:keys")

        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ["scp", *map(str, files), "alice@web:keys"]

    @patch("keyshare.infra.process.subprocess.run")
    def test_failure_maps_to_upload_error(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1)
        with pytest.raises(UploadError):
            ScpRemoteCopy().copy([Path("x")], "alice@web:keys")


# ---------------------------------------------------------------------------
# LocalArtifactStore
# ---------------------------------------------------------------------------

class TestLocalArtifactStore:
    def test_readable_only_for_files(self, tmp_path: Path) -> None:
        store = LocalArtifactStore()
        target = tmp_path / "a.txt"
        assert store.is_readable(target) is False
        assert store.is_readable(tmp_path) is False
        target.write_text("x", encoding="utf-8")
        assert store.is_readable(target) is True

    def test_append_returns_bytes_copied(self, tmp_path: Path) -> None:
        store = LocalArtifactStore()
        src, dst = tmp_path / "src", tmp_path / "dst"
        src.write_bytes(b"KEY")
        dst.write_bytes(b"PRE")
        assert store.append(src, dst) == 3
        assert dst.read_bytes() == b"PREKEY"

    def test_rename_replaces_target(self, tmp_path: Path) -> None:
        store = LocalArtifactStore()
        src, dst = tmp_path / "src", tmp_path / "dst"
        src.write_text("new", encoding="utf-8")
        dst.write_text("old", encoding="utf-8")
        store.rename(src, dst)
        assert not src.exists()
        assert dst.read_text(encoding="utf-8") == "new"

    def test_rename_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(MissingArtifactError):
            LocalArtifactStore().rename(tmp_path / "nope", tmp_path / "dst")

    def test_remove_is_idempotent(self, tmp_path: Path) -> None:
        store = LocalArtifactStore()
        target = tmp_path / "gone"
        target.write_text("x", encoding="utf-8")
        store.remove(target)
        store.remove(target)
        assert not target.exists()


# ---------------------------------------------------------------------------
# Tool detection
# ---------------------------------------------------------------------------

class TestToolDetector:
    @patch("keyshare.infra.tool_detector.shutil.which")
    def test_found(self, mock_which: MagicMock) -> None:
        mock_which.return_value = "/usr/bin/gpg"
        status = detect_tool("gpg")
        assert status.found is True
        assert isinstance(status.path, Path)
        assert status.install_commands == ()

    @patch("keyshare.infra.tool_detector.shutil.which", return_value=None)
    def test_not_found(self, _mock_which: MagicMock) -> None:
        status = detect_tool("scp")
        assert status.found is False
        assert status.path is None
        assert len(status.install_commands) > 0

    @patch("keyshare.infra.tool_detector.shutil.which", return_value=None)
    def test_require_raises_with_hint(self, _mock_which: MagicMock) -> None:
        with pytest.raises(ToolNotFoundError) as exc_info:
            require_tool("gpg")
        assert exc_info.value.hint is not None
        assert "Install gpg" in exc_info.value.hint

    @patch("keyshare.infra.tool_detector.platform.system", return_value="Linux")
    def test_linux_package_names(self, _mock_system: MagicMock) -> None:
        commands = _platform_install_commands("gpg")
        assert "sudo apt install gnupg" in commands
        assert "sudo dnf install gnupg2" in commands

    def test_status_is_frozen(self) -> None:
        status = ToolStatus(name="gpg", found=False, path=None, install_commands=())
        with pytest.raises(AttributeError):
            status.found = True  # type: ignore[misc]
