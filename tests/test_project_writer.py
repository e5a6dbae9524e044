"""
Tests for chainform.export.writer.
"""

import io
import zipfile

import pytest

from chainform.errors import ProjectWriteError
from chainform.export import ProjectWriter

FILES = {
    "package.json": "{}\n",
    "src/main.tsx": "// main\n",
    "src/components/GeneratedForm.tsx": "// form\n",
}


class TestWriteDirectory:
    """Test ProjectWriter.write_directory"""

    def test_writes_tree(self, tmp_path):
        """Every file lands below the output directory"""
        out = ProjectWriter().write_directory(FILES, tmp_path / "app")

        assert out == (tmp_path / "app").resolve()
        assert (out / "src" / "components" / "GeneratedForm.tsx").read_text(encoding="utf-8") == "// form\n"
        assert sorted(str(p.relative_to(out).as_posix()) for p in out.rglob("*") if p.is_file()) == sorted(FILES)

    def test_existing_empty_directory(self, tmp_path):
        """An empty directory is accepted"""
        (tmp_path / "app").mkdir()
        ProjectWriter().write_directory(FILES, tmp_path / "app")
        assert (tmp_path / "app" / "package.json").exists()

    def test_refuses_non_empty_directory(self, tmp_path):
        """Existing content is never overwritten"""
        (tmp_path / "app").mkdir()
        (tmp_path / "app" / "keep.txt").write_text("x", encoding="utf-8")

        with pytest.raises(ProjectWriteError) as excinfo:
            ProjectWriter().write_directory(FILES, tmp_path / "app")
        assert excinfo.value.hint
        assert not (tmp_path / "app" / "package.json").exists()

    def test_refuses_file_target(self, tmp_path):
        """A file at the output path is rejected"""
        target = tmp_path / "app"
        target.write_text("x", encoding="utf-8")
        with pytest.raises(ProjectWriteError):
            ProjectWriter().write_directory(FILES, target)

    @pytest.mark.parametrize("path", ["../escape.txt", "/etc/passwd", "src/../../x", ""])
    def test_rejects_escaping_paths(self, tmp_path, path):
        """Paths outside the project root are rejected before writing"""
        with pytest.raises(ProjectWriteError):
            ProjectWriter().write_directory({path: "x"}, tmp_path / "app")
        assert not (tmp_path / "app").exists()


class TestWriteZip:
    """Test ProjectWriter.write_zip"""

    def test_archive_contents(self):
        """Entries are sorted with fixed timestamps and permissions"""
        data = ProjectWriter().write_zip(FILES)
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            infos = archive.infolist()
            assert [info.filename for info in infos] == sorted(FILES)
            assert all(info.date_time == (1980, 1, 1, 0, 0, 0) for info in infos)
            assert all((info.external_attr >> 16) == 0o644 for info in infos)
            assert archive.read("src/main.tsx").decode("utf-8") == "// main\n"

    def test_deterministic(self):
        """Insertion order does not change the bytes"""
        reordered = dict(reversed(list(FILES.items())))
        assert ProjectWriter().write_zip(FILES) == ProjectWriter().write_zip(reordered)

    def test_rejects_escaping_paths(self):
        """Archive members cannot escape the root"""
        with pytest.raises(ProjectWriteError):
            ProjectWriter().write_zip({"../x": "x"})
