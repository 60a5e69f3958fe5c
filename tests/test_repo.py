import pytest

from shipwright.errors import Error
from shipwright.repo import (
    REPO_CONFIG_FILE,
    ListOptions,
    get_package_root,
    get_project_root,
    list_all_files,
    list_changed_files,
    list_cpp_files,
    list_project_sources,
    list_sources,
)


def make(path, text=""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def project(tmp_path, monkeypatch):
    make(tmp_path / REPO_CONFIG_FILE, '[package]\nname = "demo"\nversion = "0.1.0"\n')
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_list_options_defaults():
    options = ListOptions()
    assert options.cached_only is True
    assert options.commit == "HEAD"


def test_package_root_found_from_subdir(project, monkeypatch):
    sub = project / "src" / "deep"
    sub.mkdir(parents=True)
    monkeypatch.chdir(sub)
    assert get_package_root() == project
    assert get_project_root() == project


def test_project_root_is_workspace(tmp_path, monkeypatch):
    make(tmp_path / REPO_CONFIG_FILE, '[workspace]\nmembers = ["pkg"]\n')
    member = tmp_path / "pkg"
    make(member / REPO_CONFIG_FILE, '[package]\nname = "pkg"\nversion = "0.1.0"\n')
    monkeypatch.chdir(member)
    assert get_package_root() == member
    assert get_project_root() == tmp_path


def test_no_repository(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(Error):
        get_package_root()


def test_list_sources_recursive(tmp_path):
    a = make(tmp_path / "a.cpp")
    b = make(tmp_path / "x" / "y" / "b.cpp")
    make(tmp_path / "c.h")
    assert list_sources(tmp_path) == {a, b}
    assert list_sources(tmp_path / "missing") == set()


def test_list_cpp_files_not_recursive(tmp_path):
    a = make(tmp_path / "a.cpp")
    make(tmp_path / "x" / "b.cpp")
    assert list_cpp_files(tmp_path) == {a}
    assert list_cpp_files(tmp_path / "missing") == set()


def test_list_project_sources(project):
    main = make(project / "src" / "main.cpp")
    make(project / "lib" / "other.cpp")
    assert list_project_sources("src") == {main}


def test_list_all_files(project):
    header = make(project / "include" / "demo.h")
    source = make(project / "lib" / "demo.cpp")
    test = make(project / "tests" / "t.cpp")
    make(project / "lib" / "notes.txt")
    make(project / "other" / "ignored.cpp")
    assert list_all_files() == {header, source, test}


def test_changed_files_outside_git_lists_all(project):
    make(project / "src" / "main.cpp")
    make(project / "include" / "demo.h")
    assert list_changed_files(ListOptions(cached_only=False)) == list_all_files()