"""Shared fixtures. Changing these values will affect many tests."""

from datetime import datetime

import pytest

from textnote.config import ArchiveOpts, FileOpts, HeaderOpts, Opts, SectionOpts, validate_config


def make_opts(app_dir="my/app/dir") -> Opts:
    opts = Opts(
        app_dir=str(app_dir),
        header=HeaderOpts(
            prefix="-^-",
            suffix="-v-",
            trailing_newlines=1,
            time_format="[%a] %d %b %Y",
        ),
        section=SectionOpts(
            prefix="_p_",
            suffix="_q_",
            trailing_newlines=3,
            names=["TestSectionA", "TestSectionB", "TestSectionC"],
        ),
        file=FileOpts(ext="txt", time_format="%Y-%m-%d"),
        archive=ArchiveOpts(
            after_days=14,
            file_prefix="archive-",
            header_prefix="ARCHIVEPREFIX ",
            header_suffix=" ARCHIVESUFFIX",
            section_content_prefix="[",
            section_content_suffix="]",
            section_content_time_format="%Y-%m-%d",
            month_time_format="%b%Y",
        ),
    )
    validate_config(opts)
    return opts


@pytest.fixture
def opts():
    return make_opts()


@pytest.fixture
def file_opts(tmp_path):
    """Options rooted in a temporary app directory."""
    return make_opts(tmp_path)


@pytest.fixture
def date():
    return datetime(2020, 12, 20, 1, 1, 1, 1)
