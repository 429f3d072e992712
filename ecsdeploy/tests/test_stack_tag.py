"""Unit tests for the persisted stack tag."""
import re

import pytest

from ecsdeploy import stack_tag
from ecsdeploy.utils import DeployError


class TestGenerateStackTag:

    def test_tag_is_short_hex(self):
        tag = stack_tag.generate_stack_tag()
        assert re.fullmatch(r"[0-9a-f]{8}", tag)

    def test_tags_differ(self):
        assert stack_tag.generate_stack_tag() != stack_tag.generate_stack_tag()


class TestLoadOrCreateStackTag:

    def test_creates_file_when_missing(self, tmp_path):
        path = tmp_path / "stack-tag.txt"
        tag = stack_tag.load_or_create_stack_tag(str(path))
        assert path.read_text() == tag + "\n"

    def test_rerun_reuses_existing_tag(self, tmp_path):
        path = str(tmp_path / "stack-tag.txt")
        first = stack_tag.load_or_create_stack_tag(path)
        second = stack_tag.load_or_create_stack_tag(path)
        assert first == second

    def test_loads_tag_written_by_hand(self, tmp_path):
        path = tmp_path / "stack-tag.txt"
        path.write_text("  deadbeef \n")
        assert stack_tag.load_or_create_stack_tag(str(path)) == "deadbeef"

    def test_empty_file_is_an_error(self, tmp_path):
        path = tmp_path / "stack-tag.txt"
        path.write_text("\n")
        with pytest.raises(DeployError):
            stack_tag.load_or_create_stack_tag(str(path))
        assert path.read_text() == "\n"

    def test_unwritable_location_is_an_error(self, tmp_path):
        with pytest.raises(DeployError):
            stack_tag.load_or_create_stack_tag(str(tmp_path / "missing-dir" / "stack-tag.txt"))
