"""Tests for the shared workflow layer."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from textnote.adapters.editor import Editor, get_editor
from textnote.adapters.file_store import FileReadWriter
from textnote.config import FileOpts
from textnote.core.errors import WorkflowError
from textnote.core.section import ContentItem
from textnote.core.template import Template
from textnote.workflows import (
    archive_notes,
    get_latest_file,
    next_weekday,
    open_note,
    resolve_copy_date,
    resolve_date,
)

NOW = datetime(2020, 4, 12, 9, 30)


def files_of(*names):
    return lambda _dir: list(names)


def write_note(opts, date, **section_texts) -> Template:
    t = Template(opts, date)
    for name, text in section_texts.items():
        t.get_section(name).contents = [ContentItem(text=text)]
    FileReadWriter().overwrite(t)
    return t


class TestGetLatestFile:
    def test_no_files(self):
        with pytest.raises(WorkflowError, match="cannot find latest file"):
            get_latest_file([], NOW, FileOpts())

    def test_no_dated_files(self):
        with pytest.raises(WorkflowError):
            get_latest_file(["archive-Dec2019.txt", ".config", "foobar"], NOW, FileOpts())

    def test_future_file_ignored(self):
        with pytest.raises(WorkflowError):
            get_latest_file(["2020-04-13.txt"], NOW, FileOpts())

    def test_most_recent(self):
        files = [".config", "2020-03-11.txt", "2020-03-13.txt", "2020-03-12.txt", "archive-Apr2020.txt"]
        assert get_latest_file(files, NOW, FileOpts()) == "2020-03-13.txt"

    def test_today_counts(self):
        files = ["2020-04-11.txt", "2020-04-12.txt", "2020-04-13.txt"]
        assert get_latest_file(files, NOW, FileOpts()) == "2020-04-12.txt"


class TestResolveDate:
    def test_defaults_to_now(self, opts):
        assert resolve_date(opts, NOW) == NOW

    def test_explicit_date(self, opts):
        assert resolve_date(opts, NOW, date="2020-01-05") == datetime(2020, 1, 5)

    def test_malformed_date(self, opts):
        with pytest.raises(WorkflowError, match="malformed date"):
            resolve_date(opts, NOW, date="Jan 5")

    def test_days_back(self, opts):
        assert resolve_date(opts, NOW, days_back=3) == NOW - timedelta(days=3)

    def test_tomorrow(self, opts):
        assert resolve_date(opts, NOW, tomorrow=True) == NOW + timedelta(days=1)

    def test_latest(self, opts):
        get_files = files_of("2020-04-01.txt", "2020-04-10.txt")
        assert resolve_date(opts, NOW, latest=True, get_files=get_files) == datetime(2020, 4, 10)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"date": "2020-01-05", "days_back": 1},
            {"tomorrow": True, "latest": True},
            {"days_back": 2, "tomorrow": True},
        ],
    )
    def test_mutually_exclusive(self, opts, kwargs):
        with pytest.raises(WorkflowError, match="only one of"):
            resolve_date(opts, NOW, **kwargs)


class TestResolveCopyDate:
    def test_explicit(self, opts):
        assert resolve_copy_date(opts, NOW, copy_date="2020-04-01") == datetime(2020, 4, 1)

    def test_days_back(self, opts):
        assert resolve_copy_date(opts, NOW, copy_days_back=2) == NOW - timedelta(days=2)

    def test_defaults_to_latest(self, opts):
        get_files = files_of("2020-04-09.txt", "2020-04-11.txt")
        assert resolve_copy_date(opts, NOW, get_files=get_files) == datetime(2020, 4, 11)

    def test_mutually_exclusive(self, opts):
        with pytest.raises(WorkflowError, match="only one of"):
            resolve_copy_date(opts, NOW, copy_date="2020-04-01", copy_days_back=1)


class TestNextWeekday:
    # NOW is a Sunday
    def test_next_monday(self):
        assert next_weekday(NOW, 1) == NOW + timedelta(days=1)

    def test_same_weekday_goes_a_week_ahead(self):
        assert next_weekday(NOW, 0) == NOW + timedelta(days=7)

    def test_saturday(self):
        assert next_weekday(NOW, 6) == NOW + timedelta(days=6)

    def test_invalid(self):
        with pytest.raises(WorkflowError, match="invalid day of the week"):
            next_weekday(NOW, 7)


class TestGetEditor:
    def test_default(self):
        editor = get_editor("")
        assert editor.cmd == "vim"
        assert editor.default
        assert editor.get_args(4) == ["+4"]

    def test_known(self):
        editor = get_editor("nano")
        assert not editor.default
        assert editor.get_args(4) == ["+4"]

    def test_unknown(self):
        editor = get_editor("code")
        assert not editor.supported
        assert editor.get_args(4) == []


@patch("textnote.adapters.editor.subprocess.run")
class TestOpenNote:
    def test_creates_missing_note_and_opens(self, mock_run, file_opts, tmp_path):
        t = open_note(file_opts, NOW, editor=Editor(cmd="vim"))

        path = tmp_path / "2020-04-12.txt"
        assert path.read_text() == t.render()
        mock_run.assert_called_once_with(["vim", "+4", str(path)], check=True)

    def test_existing_note_is_not_overwritten(self, mock_run, file_opts, tmp_path):
        path = tmp_path / "2020-04-12.txt"
        path.write_text("hand edited")

        open_note(file_opts, NOW, editor=Editor(cmd="vim"))

        assert path.read_text() == "hand edited"

    def test_copy_sections(self, mock_run, file_opts):
        write_note(file_opts, datetime(2020, 4, 11), TestSectionA="carry over\n", TestSectionB="finished\n")

        t = open_note(
            file_opts,
            NOW,
            copy_date=datetime(2020, 4, 11),
            sections=["TestSectionA"],
            editor=Editor(cmd="vim"),
        )

        assert t.get_section("TestSectionA").contents == [ContentItem(text="carry over\n")]
        assert t.get_section("TestSectionB").contents == []
        reread = Template(file_opts, datetime(2020, 4, 11))
        FileReadWriter().read(reread)
        assert reread.get_section("TestSectionA").contents == [ContentItem(text="carry over\n")]

    def test_move_sections(self, mock_run, file_opts):
        write_note(file_opts, datetime(2020, 4, 11), TestSectionA="carry over\n")
        write_note(file_opts, NOW, TestSectionA="already here\n")

        open_note(
            file_opts,
            NOW,
            copy_date=datetime(2020, 4, 11),
            sections=["TestSectionA"],
            delete=True,
            editor=Editor(cmd="vim"),
        )

        src = Template(file_opts, datetime(2020, 4, 11))
        FileReadWriter().read(src)
        assert src.get_section("TestSectionA").contents == []
        tgt = Template(file_opts, NOW)
        FileReadWriter().read(tgt)
        # consecutive headerless items read back as one
        assert tgt.get_section("TestSectionA").contents == [
            ContentItem(text="already here\ncarry over\n"),
        ]

    def test_copy_from_missing_note(self, mock_run, file_opts):
        with pytest.raises(WorkflowError, match="cannot read source file"):
            open_note(
                file_opts,
                NOW,
                copy_date=datetime(2020, 4, 1),
                sections=["TestSectionA"],
                editor=Editor(cmd="vim"),
            )
        mock_run.assert_not_called()

    def test_copy_unknown_section(self, mock_run, file_opts):
        write_note(file_opts, datetime(2020, 4, 11))
        with pytest.raises(WorkflowError, match=r"cannot copy section \[Nope\]"):
            open_note(
                file_opts,
                NOW,
                copy_date=datetime(2020, 4, 11),
                sections=["Nope"],
                editor=Editor(cmd="vim"),
            )


class TestArchiveNotes:
    @pytest.fixture
    def notes(self, file_opts, tmp_path):
        write_note(file_opts, datetime(2020, 12, 1), TestSectionA="old\n")
        write_note(file_opts, datetime(2020, 12, 28), TestSectionA="recent\n")
        (tmp_path / "2020-11-02.txt").write_text("not a header\n")
        (tmp_path / "foo.txt").write_text("not a note")
        (tmp_path / ".config").write_text("")
        return tmp_path

    def test_archive_and_delete(self, file_opts, notes):
        result = archive_notes(file_opts, datetime(2020, 12, 29), delete=True)

        assert result.written
        assert result.archived_files == [notes / "2020-12-01.txt"]
        assert result.deleted_files == [notes / "2020-12-01.txt"]
        assert result.skipped_files == ["2020-11-02.txt"]
        assert not (notes / "2020-12-01.txt").exists()
        assert (notes / "2020-12-28.txt").exists()
        assert "[2020-12-01]\nold\n" in (notes / "archive-Dec2020.txt").read_text()

    def test_keep_daily_notes_by_default(self, file_opts, notes):
        archive_notes(file_opts, datetime(2020, 12, 29))
        assert (notes / "2020-12-01.txt").exists()
        assert (notes / "archive-Dec2020.txt").exists()

    def test_dry_run(self, file_opts, notes):
        result = archive_notes(file_opts, datetime(2020, 12, 29), delete=True, dry_run=True)

        assert result.archived_files == [notes / "2020-12-01.txt"]
        assert not result.written
        assert result.deleted_files == []
        assert (notes / "2020-12-01.txt").exists()
        assert not (notes / "archive-Dec2020.txt").exists()

    def test_no_write_only_deletes(self, file_opts, notes):
        result = archive_notes(file_opts, datetime(2020, 12, 29), delete=True, no_write=True)

        assert not result.written
        assert not (notes / "archive-Dec2020.txt").exists()
        assert not (notes / "2020-12-01.txt").exists()


class TestFileReadWriter:
    def test_write_if_not_exists(self, file_opts, tmp_path):
        rw = FileReadWriter()
        t = Template(file_opts, NOW)

        rw.write_if_not_exists(t)
        assert (tmp_path / "2020-04-12.txt").read_text() == t.render()

        (tmp_path / "2020-04-12.txt").write_text("edited")
        rw.write_if_not_exists(t)
        assert (tmp_path / "2020-04-12.txt").read_text() == "edited"
