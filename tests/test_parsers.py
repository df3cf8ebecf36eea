"""Tests for manifest parsers."""

import json
from pathlib import Path

import pytest

from rot_detector.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    UnsupportedManifestError,
)
from rot_detector.models.model_dependency import Ecosystem
from rot_detector.parsers import (
    detect_file_type,
    parse_dependency_file,
    parse_package_json,
    parse_requirements_txt,
    resolve_manifest_path,
)
from rot_detector.parsers.package_json import clean_version
from rot_detector.parsers.requirements_txt import parse_requirement_line


def _write_package_json(directory: Path, data: dict) -> Path:
    path = directory / "package.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestDetectFileType:
    """Tests for detect_file_type."""

    def test_package_json(self) -> None:
        assert detect_file_type("some/dir/package.json") == Ecosystem.NPM

    def test_requirements(self) -> None:
        assert detect_file_type("requirements.txt") == Ecosystem.PYPI
        assert detect_file_type("requirements-dev.txt") == Ecosystem.PYPI

    def test_case_insensitive(self) -> None:
        assert detect_file_type("Package.JSON") == Ecosystem.NPM

    def test_unknown(self) -> None:
        assert detect_file_type("Cargo.toml") is None
        assert detect_file_type("go.mod") is None


class TestResolveManifestPath:
    """Tests for resolve_manifest_path."""

    def test_file_path(self, tmp_path: Path) -> None:
        path = _write_package_json(tmp_path, {})
        assert resolve_manifest_path(path) == path.resolve()

    def test_directory_prefers_package_json(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {})
        (tmp_path / "requirements.txt").write_text("requests\n")
        assert resolve_manifest_path(tmp_path).name == "package.json"

    def test_directory_with_requirements(self, tmp_path: Path) -> None:
        (tmp_path / "requirements.txt").write_text("requests\n")
        assert resolve_manifest_path(tmp_path).name == "requirements.txt"

    def test_empty_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError, match="No package.json or requirements.txt"):
            resolve_manifest_path(tmp_path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError, match="File not found"):
            resolve_manifest_path(tmp_path / "package.json")


class TestPackageJson:
    """Tests for the package.json parser."""

    def test_dependencies_and_dev_dependencies(self, tmp_path: Path) -> None:
        path = _write_package_json(
            tmp_path,
            {
                "name": "app",
                "dependencies": {"express": "^4.19.2", "lodash": "~4.17.21"},
                "devDependencies": {"jest": ">=29.0.0"},
            },
        )

        deps = parse_package_json(path)

        assert [d.name for d in deps] == ["express", "lodash", "jest"]
        assert [d.version for d in deps] == ["4.19.2", "4.17.21", "29.0.0"]
        assert [d.is_dev for d in deps] == [False, False, True]
        assert all(d.ecosystem == Ecosystem.NPM for d in deps)

    def test_no_dependencies(self, tmp_path: Path) -> None:
        path = _write_package_json(tmp_path, {"name": "empty"})
        assert parse_package_json(path) == []

    def test_scoped_package(self, tmp_path: Path) -> None:
        path = _write_package_json(tmp_path, {"dependencies": {"@babel/core": "7.24.0"}})
        deps = parse_package_json(path)
        assert deps[0].name == "@babel/core"
        assert deps[0].version == "7.24.0"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestParseError, match="Invalid JSON"):
            parse_package_json(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_bytes(b'{"dependencies": {"\xff": "1.0.0"}}')
        with pytest.raises(ManifestParseError, match="Cannot read"):
            parse_package_json(path)

    def test_non_object_dependencies(self, tmp_path: Path) -> None:
        path = _write_package_json(tmp_path, {"dependencies": ["express"]})
        with pytest.raises(ManifestParseError):
            parse_package_json(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError):
            parse_package_json(tmp_path / "package.json")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("^1.2.3", "1.2.3"),
            ("~1.2.3", "1.2.3"),
            (">=1.2.3", "1.2.3"),
            ("<=2.0.0", "2.0.0"),
            ("=1.0.0", "1.0.0"),
            ("1.0.0", "1.0.0"),
            ("latest", "latest"),
        ],
    )
    def test_clean_version(self, raw: str, expected: str) -> None:
        assert clean_version(raw) == expected


class TestRequirementsTxt:
    """Tests for the requirements.txt parser."""

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "requirements.txt"
        path.write_text(
            "\n".join([
                "# Web stack",
                "flask==3.0.0",
                "requests>=2.31.0,<3",
                "",
                "uvicorn[standard]~=0.29.0  # server",
                "numpy",
                'pywin32==306 ; sys_platform == "win32"',
                "-r base.txt",
                "--index-url https://pypi.org/simple",
                "-e .",
                "git+https://github.com/psf/black.git#egg=black",
                "https://example.com/pkg.tar.gz",
                "zope.interface>=6.0",
            ]),
            encoding="utf-8",
        )

        deps = parse_requirements_txt(path)

        assert [(d.name, d.version) for d in deps] == [
            ("flask", "3.0.0"),
            ("requests", "2.31.0"),
            ("uvicorn", "0.29.0"),
            ("numpy", "*"),
            ("pywin32", "306"),
            ("zope.interface", "6.0"),
        ]
        assert all(d.ecosystem == Ecosystem.PYPI for d in deps)
        assert not any(d.is_dev for d in deps)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "requirements.txt"
        path.write_text("# nothing here\n\n", encoding="utf-8")
        assert parse_requirements_txt(path) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError):
            parse_requirements_txt(tmp_path / "requirements.txt")

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("package", ("package", "*")),
            ("package==1.0.0", ("package", "1.0.0")),
            ("package >= 1.0", ("package", "1.0")),
            ("package[extra]==1.0.0", ("package", "1.0.0")),
            ("package~=1.4.2", ("package", "1.4.2")),
            ("package!=1.5", ("package", "1.5")),
            ("   ", None),
            ("# comment", None),
        ],
    )
    def test_parse_requirement_line(self, line: str, expected) -> None:
        assert parse_requirement_line(line) == expected


class TestParseDependencyFile:
    """Tests for parse_dependency_file dispatch."""

    def test_dispatch_npm(self, tmp_path: Path) -> None:
        path = _write_package_json(tmp_path, {"dependencies": {"express": "4.0.0"}})
        assert parse_dependency_file(path)[0].ecosystem == Ecosystem.NPM

    def test_dispatch_pypi(self, tmp_path: Path) -> None:
        path = tmp_path / "requirements.txt"
        path.write_text("flask\n", encoding="utf-8")
        assert parse_dependency_file(path)[0].ecosystem == Ecosystem.PYPI

    def test_unsupported(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.toml"
        path.write_text("[dependencies]\n", encoding="utf-8")
        with pytest.raises(UnsupportedManifestError, match="Unsupported file type"):
            parse_dependency_file(path)
