import pytest

from gpxreduce.core.env import get_project_root, resolve_project_path


@pytest.fixture(autouse=True)
def _clear_root_cache():
    get_project_root.cache_clear()
    yield
    get_project_root.cache_clear()


def test_relative_paths_resolve_against_nearest_project_root(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert get_project_root() == tmp_path.resolve()
    assert resolve_project_path("output") == tmp_path.resolve() / "output"


def test_absolute_paths_are_returned_unchanged(tmp_path):
    target = tmp_path / "somewhere" / "input"
    assert resolve_project_path(target) == target
