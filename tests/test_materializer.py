"""Tests for remote directory creation."""

from __future__ import annotations

import errno
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import paramiko

from rssh.core.exceptions import TransferError
from rssh.domain.transfer import ensure_remote_dir

from fakes import FakeSFTP


class TestEnsureRemoteDir(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.sftp = FakeSFTP(Path(self._tmp.name) / "remote")

    def test_creates_missing_components_parent_first(self):
        ensure_remote_dir(self.sftp, "/srv/data/2024")

        self.assertEqual(self.sftp.mkdir_calls, ["/srv", "/srv/data", "/srv/data/2024"])
        self.assertTrue(self.sftp.local("/srv/data/2024").is_dir())

    def test_uses_mode_0755(self):
        ensure_remote_dir(self.sftp, "/a")
        mode = self.sftp.local("/a").stat().st_mode & 0o777
        # umask can only remove bits
        self.assertEqual(mode & ~0o755, 0)

    def test_existing_prefix_is_only_checked(self):
        self.sftp.local("/srv").mkdir()
        ensure_remote_dir(self.sftp, "/srv/new")
        self.assertEqual(self.sftp.mkdir_calls, ["/srv/new"])

    def test_is_idempotent(self):
        ensure_remote_dir(self.sftp, "/x/y/z")
        self.sftp.mkdir_calls.clear()
        self.sftp.stat_calls.clear()

        ensure_remote_dir(self.sftp, "/x/y/z")

        self.assertEqual(self.sftp.mkdir_calls, [])
        self.assertEqual(self.sftp.stat_calls, ["/x", "/x/y", "/x/y/z"])

    def test_file_component_is_a_hard_stop(self):
        self.sftp.local("/x").mkdir()
        self.sftp.local("/x/file").write_bytes(b"data")

        with self.assertRaises(TransferError) as err:
            ensure_remote_dir(self.sftp, "/x/file/sub")

        self.assertIn("exists but is not a directory", str(err.exception))
        self.assertIn("/x/file", str(err.exception))
        self.assertEqual(self.sftp.mkdir_calls, [])
        self.assertEqual(self.sftp.local("/x/file").read_bytes(), b"data")

    def test_mkdir_failure_names_the_path(self):
        self.sftp.mkdir_error = PermissionError(errno.EACCES, "Permission denied")
        with self.assertRaises(TransferError) as err:
            ensure_remote_dir(self.sftp, "/locked/dir")
        self.assertIn("failed to mkdir /locked", str(err.exception))
        self.assertIsInstance(err.exception.__cause__, PermissionError)

    def test_session_failure_during_stat_names_the_path(self):
        with mock.patch.object(self.sftp, "stat", side_effect=paramiko.SSHException("Server connection dropped")):
            with self.assertRaises(TransferError) as err:
                ensure_remote_dir(self.sftp, "/srv/data")
        self.assertIn("failed to stat remote path /srv", str(err.exception))
        self.assertEqual(self.sftp.mkdir_calls, [])

    def test_session_failure_during_mkdir(self):
        self.sftp.mkdir_error = EOFError()
        with self.assertRaises(TransferError) as err:
            ensure_remote_dir(self.sftp, "/gone")
        self.assertIn("failed to mkdir /gone", str(err.exception))

    def test_relative_path_starts_at_session_directory(self):
        ensure_remote_dir(self.sftp, "uploads/today")
        self.assertEqual(self.sftp.mkdir_calls, ["uploads", "uploads/today"])

    def test_redundant_separators_and_dots_are_normalized(self):
        ensure_remote_dir(self.sftp, "/a//./b/")
        self.assertEqual(self.sftp.mkdir_calls, ["/a", "/a/b"])

    def test_root_creates_nothing(self):
        ensure_remote_dir(self.sftp, "/")
        ensure_remote_dir(self.sftp, "")
        self.assertEqual(self.sftp.mkdir_calls, [])
        self.assertEqual(self.sftp.stat_calls, [])

    def test_reports_each_created_directory(self):
        self.sftp.local("/srv").mkdir()
        created = []
        ensure_remote_dir(self.sftp, "/srv/a/b", on_created=created.append)
        self.assertEqual(created, ["/srv/a", "/srv/a/b"])

    def test_logs_created_directories(self):
        with self.assertLogs("rssh.domain.transfer.materializer", level=logging.INFO) as logs:
            ensure_remote_dir(self.sftp, "/logged")
        self.assertEqual(len(logs.records), 1)
        self.assertIn("/logged", logs.output[0])


if __name__ == "__main__":
    unittest.main()
