"""
Unit tests for enum_string_gen.syntax.discovery.SourceDiscovery.
"""

import pytest

from enum_string_gen.exceptions import SourceParseError
from enum_string_gen.syntax import SourceDiscovery


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def project(tmp_path):
    """
    Minimal C# project tree:
        proj/
          Colours.cs
          Strings/Resources.cs
          Generated.g.cs           (skipped)
          bin/Debug/Copy.cs        (skipped)
          obj/Temp.cs              (skipped)
          .vs/Hidden.cs            (skipped)
          README.md                (not C#)
    """
    root = tmp_path / "proj"
    (root / "Strings").mkdir(parents=True)
    (root / "bin" / "Debug").mkdir(parents=True)
    (root / "obj").mkdir()
    (root / ".vs").mkdir()
    (root / "Colours.cs").write_text("namespace P { public enum Colour { Red } }", encoding="utf-8")
    (root / "Strings" / "Resources.cs").write_text(
        'namespace P { public static class Res { public static string ColourRedDescription => "Red"; } }',
        encoding="utf-8",
    )
    for skipped in ("Generated.g.cs", "bin/Debug/Copy.cs", "obj/Temp.cs", ".vs/Hidden.cs"):
        (root / skipped).write_text("enum Skipped { X }", encoding="utf-8")
    (root / "README.md").write_text("# readme", encoding="utf-8")
    return root


class TestCollect:

    def test_directory_walk_skips_build_and_generated_files(self, project):
        files = SourceDiscovery().collect([str(project)])
        assert [f.relative_to(project).as_posix() for f in files] == [
            "Colours.cs",
            "Strings/Resources.cs",
        ]

    def test_explicit_file_is_always_included(self, project):
        files = SourceDiscovery().collect([str(project / "Generated.g.cs")])
        assert [f.name for f in files] == ["Generated.g.cs"]

    def test_duplicates_removed(self, project):
        files = SourceDiscovery().collect([str(project), str(project / "Colours.cs")])
        assert len(files) == 2

    def test_exclude(self, project):
        files = SourceDiscovery(exclude=[project / "Strings"]).collect([str(project)])
        assert [f.name for f in files] == ["Colours.cs"]

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SourceDiscovery().collect([str(tmp_path / "nope")])


class TestLoadCompilation:

    def test_loads_enums_and_types(self, project):
        compilation = SourceDiscovery().load_compilation([str(project)])
        assert [e.qualified_name for e in compilation.enums()] == ["P.Colour"]
        assert [t.qualified_name for t in compilation.types()] == ["P.Res"]

    def test_parse_error_propagates(self, tmp_path):
        (tmp_path / "Broken.cs").write_text("namespace N {", encoding="utf-8")
        with pytest.raises(SourceParseError):
            SourceDiscovery().load_compilation([str(tmp_path)])
