from __future__ import annotations

import pytest

from adapters.csv_loader import load_candidates
from core.domain.errors import CandidateSourceError


def test_reads_password_column_case_insensitively(tmp_path):
    path = tmp_path / "list.csv"
    path.write_text("Id,password,Note\n1,contoso1,a\n2, fabrikam ,b\n3,,c\n", encoding="utf-8")

    assert load_candidates(path) == ["contoso1", " fabrikam "]


def test_handles_bom_and_semicolons(tmp_path):
    path = tmp_path / "excel.csv"
    path.write_bytes("\ufeffPassword;Source\nwinter2024;hr\nspring2025;it\n".encode("utf-8"))

    assert load_candidates(path) == ["winter2024", "spring2025"]


def test_single_column_file(tmp_path):
    path = tmp_path / "single.csv"
    path.write_text("Password\nabcd\nefgh\n", encoding="utf-8")

    assert load_candidates(path) == ["abcd", "efgh"]


def test_custom_column(tmp_path):
    path = tmp_path / "custom.csv"
    path.write_text("BannedValue\nzzzz\n", encoding="utf-8")

    assert load_candidates(path, column="bannedvalue") == ["zzzz"]


def test_missing_column(tmp_path):
    path = tmp_path / "wrong.csv"
    path.write_text("Name,Value\nx,y\n", encoding="utf-8")

    with pytest.raises(CandidateSourceError, match="no 'Password' column"):
        load_candidates(path)


def test_missing_file(tmp_path):
    with pytest.raises(CandidateSourceError):
        load_candidates(tmp_path / "nope.csv")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(CandidateSourceError, match="empty"):
        load_candidates(path)
