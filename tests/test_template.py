from shipwright.repo import INCLUDE_PATH, LIB_PATH, SRC_PATH
from shipwright.template import generate_bin_template, generate_lib_template


def test_lib_template(tmp_path):
    generate_lib_template(tmp_path)
    assert (tmp_path / INCLUDE_PATH).is_dir()
    source = (tmp_path / LIB_PATH / "lib.cpp").read_text()
    assert "int add(int x, int y)" in source


def test_bin_template(tmp_path):
    generate_bin_template(tmp_path)
    source = (tmp_path / SRC_PATH / "main.cpp").read_text()
    assert source.startswith("#include <iostream>")
    assert "int main()" in source


def test_templates_can_be_regenerated(tmp_path):
    generate_bin_template(tmp_path)
    (tmp_path / SRC_PATH / "main.cpp").write_text("changed")
    generate_bin_template(tmp_path)
    assert "int main()" in (tmp_path / SRC_PATH / "main.cpp").read_text()
    assert sorted(p.name for p in tmp_path.iterdir()) == [SRC_PATH]