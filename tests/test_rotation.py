import pytest

from runlog_core.errors import DirectoryNotAccessibleError, ErrorKind
from runlog_core.paths import GENERATION_NAMES, active_log_path
from runlog_core.rotation import (
    list_generations,
    matching_files,
    prepare_log_file,
    read_generation,
)


def write(directory, name, text):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(text, encoding="utf-8")


def names(directory):
    return {p.name for p in matching_files(directory)}


class TestPrepareLogFile:
    """Generation shifting on startup"""

    def test_creates_missing_directory(self, log_dir):
        active = prepare_log_file(log_dir)

        assert log_dir.is_dir()
        assert active == active_log_path(log_dir) == log_dir / "log.txt"
        assert not active.exists()

    def test_single_log_is_promoted(self, log_dir):
        write(log_dir, "log.txt", "A")

        prepare_log_file(log_dir)

        assert names(log_dir) == {"log1.txt"}
        assert read_generation(log_dir, 1) == "A"

    def test_two_generations_shift(self, log_dir):
        write(log_dir, "log.txt", "A")
        write(log_dir, "log1.txt", "B")

        prepare_log_file(log_dir)

        assert names(log_dir) == {"log1.txt", "log2.txt"}
        assert read_generation(log_dir, 1) == "A"
        assert read_generation(log_dir, 2) == "B"

    def test_three_generations_drop_oldest(self, log_dir):
        write(log_dir, "log.txt", "A")
        write(log_dir, "log1.txt", "B")
        write(log_dir, "log2.txt", "C")

        prepare_log_file(log_dir)

        assert names(log_dir) == {"log1.txt", "log2.txt"}
        assert read_generation(log_dir, 1) == "A"
        assert read_generation(log_dir, 2) == "B"

    def test_stray_file_pair_is_wiped(self, log_dir):
        write(log_dir, "log.txt", "A")
        write(log_dir, "oddname_log_backup.txt", "junk")

        prepare_log_file(log_dir)

        assert names(log_dir) == set()

    def test_single_stray_file_is_wiped(self, log_dir):
        write(log_dir, "log1.txt", "orphan")

        prepare_log_file(log_dir)

        assert names(log_dir) == set()

    def test_unexpected_triple_is_wiped(self, log_dir):
        write(log_dir, "log.txt", "A")
        write(log_dir, "log1.txt", "B")
        write(log_dir, "catalog.csv", "C")

        prepare_log_file(log_dir)

        assert names(log_dir) == set()

    def test_more_than_three_is_wiped(self, log_dir):
        for name in GENERATION_NAMES + ("log3.txt",):
            write(log_dir, name, name)

        prepare_log_file(log_dir)

        assert names(log_dir) == set()

    def test_unrelated_files_are_kept(self, log_dir):
        write(log_dir, "log.txt", "A")
        write(log_dir, "notes.md", "keep me")
        (log_dir / "old_logs").mkdir()

        prepare_log_file(log_dir)

        assert names(log_dir) == {"log1.txt"}
        assert (log_dir / "notes.md").read_text(encoding="utf-8") == "keep me"
        assert (log_dir / "old_logs").is_dir()

    def test_directory_that_is_a_file(self, tmp_path):
        blocker = tmp_path / "Logs"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(DirectoryNotAccessibleError) as exc_info:
            prepare_log_file(blocker)

        assert exc_info.value.kind is ErrorKind.DIRECTORY_NOT_ACCESSIBLE

    def test_rename_failure_is_reported(self, log_dir, monkeypatch):
        write(log_dir, "log.txt", "A")

        def broken_replace(self, target):
            raise PermissionError("read-only")

        monkeypatch.setattr(type(log_dir), "replace", broken_replace)

        with pytest.raises(DirectoryNotAccessibleError):
            prepare_log_file(log_dir)


class TestRotationAcrossRuns:
    """Rotation over several consecutive runs"""

    def test_generations_shift_one_slot_per_run(self, log_dir):
        for run in range(1, 5):
            prepare_log_file(log_dir)
            write(log_dir, "log.txt", f"run {run}")

            gens = [p.name for p in list_generations(log_dir)]
            assert gens == list(GENERATION_NAMES[: min(run, 3)])
            for age, name in enumerate(gens):
                assert (log_dir / name).read_text(encoding="utf-8") == f"run {run - age}"

    def test_never_more_than_three_generations(self, log_dir):
        for _ in range(7):
            prepare_log_file(log_dir)
            write(log_dir, "log.txt", "x")
            assert names(log_dir) <= set(GENERATION_NAMES)


class TestGenerations:
    def test_list_generations_in_age_order(self, log_dir):
        write(log_dir, "log2.txt", "C")
        write(log_dir, "log.txt", "A")

        assert [p.name for p in list_generations(log_dir)] == ["log.txt", "log2.txt"]

    def test_read_generation_rejects_bad_index(self, log_dir):
        with pytest.raises(ValueError):
            read_generation(log_dir, 3)

    def test_read_missing_generation(self, log_dir):
        log_dir.mkdir()
        with pytest.raises(FileNotFoundError):
            read_generation(log_dir, 1)
