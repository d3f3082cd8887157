"""
Command line tests

Tests argument parsing, program state creation and the pipeline stages,
with a shell script standing in for pandoc and a fixed commit hash.
"""

import sys
from argparse import Namespace
from pathlib import Path

import pytest

from mangen import __main__ as cli
from mangen.lib.manifest import VersionError
from mangen.models import ProgramState

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses shell scripts")


@pytest.fixture
def docs(tmp_path, monkeypatch):
    """Documentation tree with two man pages and a shared include"""
    root = tmp_path / "dovecot-docs"
    man = root / "docs" / "core" / "man"
    (man / "include").mkdir(parents=True)
    (man / "include" / "global-options.inc").write_text("-D\n:   Enables verbosity and debug messages.\n")
    (man / "doveadm.1.md").write_text(
        "---\nlayout: doc\n---\n# NAME\n\ndoveadm\n\n"
        "<!-- @include: include/global-options.inc -->\n\n# SEE ALSO\n\n[[man,doveconf]]\n"
    )
    (man / "doveconf.1.md").write_text("# NAME\n\ndoveconf, see [[setting,mail_path]]\n")

    fake_pandoc = tmp_path / "pandoc"
    fake_pandoc.write_text("#!/bin/sh\ncat\n")
    fake_pandoc.chmod(0o755)

    monkeypatch.setattr(cli.appsettings, "docs_root", str(root))
    monkeypatch.setattr(cli.appsettings, "pandoc_path", str(fake_pandoc))
    monkeypatch.setattr(cli.appsettings, "man_paths", ["docs/core/man/*.[0-9].md"])
    monkeypatch.setattr(cli, "versionToken_get", lambda root: "abc1234")
    return root


class TestArguments:
    """Test CLI parsing and state creation"""

    def test_output_dir(self):
        options = cli.parser.parse_args(["man"])
        assert options.outputdir == "man"
        assert options.debug is False

    def test_debug_flag(self):
        assert cli.parser.parse_args(["-d", "man"]).debug is True
        assert cli.parser.parse_args(["man", "--debug"]).debug is True

    def test_output_dir_required(self):
        with pytest.raises(SystemExit):
            cli.parser.parse_args([])

    def test_state_from_namespace(self):
        state = ProgramState.state_createFromNamespace(Namespace(outputdir="man", debug=False))
        assert state.outputdir == Path("man")
        assert state.verbosity == 1

    def test_debug_raises_verbosity(self):
        state = ProgramState.state_createFromNamespace(Namespace(outputdir="man", debug=True))
        assert state.verbosity == 2

    def test_debug_from_environment(self):
        state = ProgramState.state_createFromNamespace(
            Namespace(outputdir="man", debug=False), debug_default=True
        )
        assert state.debug is True and state.verbosity == 2

    def test_copy_is_independent(self):
        state = ProgramState(outputdir=Path("man"))
        clone = state.copy()
        clone.versionToken = "abc1234"
        assert state.versionToken == ""


class TestStages:
    """Test individual pipeline stages"""

    def test_env_check_creates_output(self, docs, tmp_path):
        state = cli.env_check(ProgramState(outputdir=tmp_path / "out" / "man"))
        assert state.envOK is True
        assert state.manOutputdir.is_dir()
        assert state.docsRoot == docs

    def test_env_check_missing_docs_root(self, docs, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(cli.appsettings, "docs_root", str(tmp_path / "missing"))
        with pytest.raises(SystemExit) as excinfo:
            cli.env_check(ProgramState(outputdir=tmp_path / "out"))
        assert excinfo.value.code == 1
        assert "Documentation root not found" in capsys.readouterr().err

    def test_env_check_missing_pandoc(self, docs, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(cli.appsettings, "pandoc_path", str(tmp_path / "no-pandoc"))
        with pytest.raises(SystemExit):
            cli.env_check(ProgramState(outputdir=tmp_path / "out"))
        assert "pandoc not found" in capsys.readouterr().err

    def test_manifest_resolve(self, docs):
        state = cli.manifest_resolve(ProgramState(docsRoot=docs))
        assert [f.name for f in state.sourceFiles] == ["doveadm.1.md", "doveconf.1.md"]

    def test_version_stamp(self, docs):
        state = cli.version_stamp(ProgramState(docsRoot=docs))
        assert state.versionToken == "abc1234"
        assert len(state.buildDate.split("/")) == 3

    def test_version_failure_exits(self, docs, monkeypatch, capsys):
        def no_repo(root):
            raise VersionError("not a git repository")

        monkeypatch.setattr(cli, "versionToken_get", no_repo)
        with pytest.raises(SystemExit):
            cli.version_stamp(ProgramState(docsRoot=docs))
        assert "not a git repository" in capsys.readouterr().err


class TestMain:
    """Test complete runs"""

    def test_builds_man_pages(self, docs, tmp_path):
        out = tmp_path / "man"
        cli.main([str(out)])

        doveadm = (out / "doveadm.1").read_text()
        assert doveadm.startswith("% doveadm(1) abc1234 | Dovecot\n%\n% ")
        assert "Enables verbosity and debug messages." in doveadm
        assert "doveconf(1)" in doveadm
        assert "layout: doc" not in doveadm

        assert "`mail_path`" in (out / "doveconf.1").read_text()

    def test_conversion_failure_exits(self, docs, tmp_path, monkeypatch, capsys):
        failing = tmp_path / "failing-pandoc"
        failing.write_text("#!/bin/sh\necho boom >&2\nexit 2\n")
        failing.chmod(0o755)
        monkeypatch.setattr(cli.appsettings, "pandoc_path", str(failing))

        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(tmp_path / "man")])

        assert excinfo.value.code == 1
        assert "0 of 2 man pages written" in capsys.readouterr().err
