"""Tests for filename validation and content root path composition."""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mdsite.exceptions import DocumentNotFoundError, InvalidFilenameError
from mdsite.filesystem.paths import ContentRoot, match_filename

if TYPE_CHECKING:
    from pathlib import Path

PROPERTY_SETTINGS = settings(
    max_examples=300,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)

_SAFE_ALPHABET = string.ascii_letters + string.digits + "_.-"
_SAFE_NAME = st.text(alphabet=_SAFE_ALPHABET, min_size=1, max_size=40).filter(
    lambda s: ".." not in s
)


@st.composite
def _name_with_forbidden_part(draw: st.DrawFn) -> str:
    prefix = draw(st.text(alphabet=_SAFE_ALPHABET, max_size=10))
    suffix = draw(st.text(alphabet=_SAFE_ALPHABET, max_size=10))
    bad = draw(st.sampled_from(["/", "..", "\x00", "\\", "%2F", "..%2F", " ", "?", "#"]))
    return prefix + bad + suffix


class TestMatchFilename:
    def test_accepts_plain_markdown_name(self) -> None:
        assert match_filename("hello-world_2.md") == "hello-world_2.md"

    def test_accepts_dotfile(self) -> None:
        assert match_filename(".hidden") == ".hidden"

    @pytest.mark.parametrize(
        "raw",
        ["", "..", "../secret", "a/b.md", "a\x00.md", "..%2Fsecret", "a b.md", "über.md", "a.md\n"],
    )
    def test_rejects_unsafe_names(self, raw: str) -> None:
        with pytest.raises(InvalidFilenameError):
            match_filename(raw)

    def test_invalid_filename_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            match_filename("../x")

    @PROPERTY_SETTINGS
    @given(raw=_SAFE_NAME)
    def test_safe_names_pass_through_unchanged(self, raw: str) -> None:
        assert match_filename(raw) == raw

    @PROPERTY_SETTINGS
    @given(raw=_name_with_forbidden_part())
    def test_forbidden_parts_are_always_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidFilenameError):
            match_filename(raw)


class TestContentRoot:
    def test_path_for_joins_directory(self, tmp_path: Path) -> None:
        root = ContentRoot(name="pages", directory=tmp_path, url_prefix="/pages")
        assert root.path_for("a.md") == tmp_path / "a.md"

    def test_path_for_revalidates_name(self, tmp_path: Path) -> None:
        root = ContentRoot(name="pages", directory=tmp_path, url_prefix="/pages")
        with pytest.raises(InvalidFilenameError):
            root.path_for("../etc/passwd")

    def test_symlink_out_of_root_is_not_found(self, tmp_path: Path) -> None:
        pages = tmp_path / "pages"
        pages.mkdir()
        secret = tmp_path / "secret.md"
        secret.write_text("secret")
        (pages / "link.md").symlink_to(secret)
        root = ContentRoot(name="pages", directory=pages, url_prefix="/pages")

        with pytest.raises(DocumentNotFoundError):
            root.path_for("link.md")

    def test_exists(self, tmp_path: Path) -> None:
        assert ContentRoot("pages", tmp_path, "/pages").exists()
        assert not ContentRoot("pages", tmp_path / "missing", "/pages").exists()

    @PROPERTY_SETTINGS
    @given(raw=_SAFE_NAME.filter(lambda s: s != "."))
    def test_accepted_names_stay_directly_under_root(self, tmp_path: Path, raw: str) -> None:
        root = ContentRoot(name="pages", directory=tmp_path, url_prefix="/pages")
        path = root.path_for(raw)
        assert path.parent == tmp_path
