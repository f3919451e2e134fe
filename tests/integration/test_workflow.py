"""
Integration tests for the complete import alias workflow.

These tests write small package trees to disk and verify that the scanner,
registry, resolver and formatter produce the expected reports together,
both through the run function and through the command line.
"""

import os
import pytest
from click.testing import CliRunner

from importalias import __version__
from importalias.cli.commands import main
from importalias.core.runner import Outcome, RunConfig, run


def write_tree(root, files):
    for relpath, content in files.items():
        path = root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def tie_message(phrase):
    return f"No consensus alias exists for this import in the project ({phrase})"


NO_ERROR_CASES = [
    (
        "single file",
        {"foo.py": "import numpy as foo\n"},
        [""],
    ),
    (
        "same alias in multiple packages",
        {"foo.py": "import numpy as foo\n", "bar/bar.py": "import numpy as foo\n"},
        ["", "bar"],
    ),
    (
        "one alias and one plain import",
        {"foo.py": "import numpy as foo\n", "bar/bar.py": "import numpy\n"},
        ["", "bar"],
    ),
    (
        "one alias and one blank import",
        {"foo.py": "import numpy as foo\n", "bar/bar.py": "import numpy as _\n"},
        ["", "bar"],
    ),
    (
        "one alias and one star import",
        {"foo.py": "import numpy as foo\n", "bar/bar.py": "from numpy import *\n"},
        ["", "bar"],
    ),
    (
        "same alias for different modules",
        {"foo.py": "import numpy as foo\n", "bar/bar.py": "import pandas as foo\n"},
        ["", "bar"],
    ),
]


class TestRunWorkflow:
    """Test whole runs over package trees on disk."""

    def paths(self, root, relpaths):
        return [os.path.join(str(root), p) if p else str(root) for p in relpaths]

    @pytest.mark.parametrize("name,files,packages", NO_ERROR_CASES, ids=[c[0] for c in NO_ERROR_CASES])
    def test_no_error(self, tmp_path, name, files, packages):
        """Test projects whose aliases are consistent."""
        write_tree(tmp_path, files)

        for verbose in (False, True):
            result = run(RunConfig(package_paths=self.paths(tmp_path, packages), verbose=verbose))

            assert result.outcome is Outcome.SUCCESS, name
            assert result.output == ""
            assert result.exit_code == 0

    def test_tie_two_packages(self, tmp_path):
        """Test two packages importing the same module under different aliases."""
        write_tree(tmp_path, {
            "foo.py": "import os\nimport numpy as foo\n",
            "bar/bar.py": "import numpy as bar\n",
        })
        root = str(tmp_path)
        foo = os.path.join(root, "foo.py")
        bar = os.path.join(root, "bar", "bar.py")
        message = tie_message('"bar" and "foo" are both used once each')
        packages = self.paths(tmp_path, ["", "bar"])

        result = run(RunConfig(package_paths=packages))
        assert result.outcome is Outcome.VIOLATIONS_FOUND
        assert result.exit_code == 1
        assert result.output.split("\n") == [
            f'{bar}:1:8: uses alias "bar" to import package "numpy". {message}.',
            f'{foo}:2:8: uses alias "foo" to import package "numpy". {message}.',
            "",
        ]

        result = run(RunConfig(package_paths=packages, verbose=True))
        assert result.outcome is Outcome.VIOLATIONS_FOUND
        assert result.output.split("\n") == [
            '"numpy" is imported using multiple different aliases:',
            "\tbar (1 file):",
            f"\t\t{bar}:1:8",
            "\tfoo (1 file):",
            f"\t\t{foo}:2:8",
            "",
        ]

    def test_ties_for_multiple_modules(self, tmp_path):
        """Test conflicts on two different modules at once."""
        write_tree(tmp_path, {
            "foo.py": "import numpy as foo\n",
            "bar/bar.py": "import numpy as bar\n",
            "baz/baz.py": "from os import path as baz\n",
            "other/other.py": "from os import path as other\n",
        })
        root = str(tmp_path)
        packages = self.paths(tmp_path, ["", "bar", "baz", "other"])
        numpy_tie = tie_message('"bar" and "foo" are both used once each')
        path_tie = tie_message('"baz" and "other" are both used once each')

        result = run(RunConfig(package_paths=packages))

        assert result.output.split("\n") == [
            f'{os.path.join(root, "bar", "bar.py")}:1:8: uses alias "bar" to import package "numpy". {numpy_tie}.',
            f'{os.path.join(root, "baz", "baz.py")}:1:16: uses alias "baz" to import package "os.path". {path_tie}.',
            f'{os.path.join(root, "foo.py")}:1:8: uses alias "foo" to import package "numpy". {numpy_tie}.',
            f'{os.path.join(root, "other", "other.py")}:1:16: uses alias "other" to import package "os.path". {path_tie}.',
            "",
        ]

        result = run(RunConfig(package_paths=packages, verbose=True))

        assert result.output.split("\n") == [
            '"numpy" is imported using multiple different aliases:',
            "\tbar (1 file):",
            f'\t\t{os.path.join(root, "bar", "bar.py")}:1:8',
            "\tfoo (1 file):",
            f'\t\t{os.path.join(root, "foo.py")}:1:8',
            '"os.path" is imported using multiple different aliases:',
            "\tbaz (1 file):",
            f'\t\t{os.path.join(root, "baz", "baz.py")}:1:16',
            "\tother (1 file):",
            f'\t\t{os.path.join(root, "other", "other.py")}:1:16',
            "",
        ]

    def test_majority_alias_recommended(self, tmp_path):
        """Test that the more common alias is recommended."""
        write_tree(tmp_path, {
            "foo.py": "import numpy as foo\n",
            "bar/bar.py": "import numpy as bar\n",
            "baz/baz.py": "import numpy as foo\n",
        })
        root = str(tmp_path)
        packages = self.paths(tmp_path, ["", "bar", "baz"])

        result = run(RunConfig(package_paths=packages))

        assert result.output.split("\n") == [
            f'{os.path.join(root, "bar", "bar.py")}:1:8: uses alias "bar" to import package "numpy". Use alias "foo" instead.',
            "",
        ]

        result = run(RunConfig(package_paths=packages, verbose=True))

        assert result.output.split("\n") == [
            '"numpy" is imported using multiple different aliases:',
            "\tfoo (2 files):",
            f'\t\t{os.path.join(root, "baz", "baz.py")}:1:8',
            f'\t\t{os.path.join(root, "foo.py")}:1:8',
            "\tbar (1 file):",
            f'\t\t{os.path.join(root, "bar", "bar.py")}:1:8',
            "",
        ]

    def test_three_way_tie(self, tmp_path):
        """Test the message when more than two aliases are tied."""
        write_tree(tmp_path, {
            "foo.py": "import numpy as foo\n",
            "bar/bar.py": "import numpy as bar\n",
            "baz/baz.py": "import numpy as baz\n",
        })
        packages = self.paths(tmp_path, ["", "bar", "baz"])
        message = tie_message('"bar", "baz" and "foo" are all used once each')

        result = run(RunConfig(package_paths=packages))

        lines = result.output.splitlines()
        assert len(lines) == 3
        assert all(line.endswith(f'. {message}.') for line in lines)

    def test_recursive(self, tmp_path):
        """Test that recursive runs pick up nested packages."""
        write_tree(tmp_path, {
            "foo.py": "import numpy as foo\n",
            "deep/er/bar.py": "import numpy as bar\n",
        })

        flat = run(RunConfig(package_paths=[str(tmp_path)]))
        nested = run(RunConfig(package_paths=[str(tmp_path)], recursive=True))

        assert flat.outcome is Outcome.SUCCESS
        assert nested.outcome is Outcome.VIOLATIONS_FOUND
        assert len(nested.output.splitlines()) == 2

    def test_extraction_failure(self, tmp_path):
        """Test that a broken file aborts the run without a report."""
        write_tree(tmp_path, {
            "foo.py": "import numpy as foo\n",
            "bar/bar.py": "import numpy as bar\n",
            "bar/broken.py": "import (\n",
        })
        packages = self.paths(tmp_path, ["", "bar"])

        result = run(RunConfig(package_paths=packages))

        assert result.outcome is Outcome.EXTRACTION_FAILED
        assert result.exit_code == 2
        assert result.output == ""
        assert result.error.filepath == os.path.join(str(tmp_path), "bar", "broken.py")

    def test_rerun_is_identical(self, tmp_path):
        """Test that running twice over the same files gives identical output."""
        write_tree(tmp_path, {
            "a.py": "import numpy as np\nimport pandas as pd\n",
            "b.py": "import numpy as npy\nimport pandas as pds\n",
            "test_c.py": "import numpy as np\n",
        })
        config = RunConfig(package_paths=[str(tmp_path)])

        assert run(config).output == run(config).output


class TestCommandLine:
    """Test the click command."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_success(self, tmp_path):
        """Test a consistent project exits cleanly without output."""
        write_tree(tmp_path, {"foo.py": "import numpy as np\n", "bar.py": "import numpy as np\n"})

        result = self.runner.invoke(main, [str(tmp_path)])

        assert result.exit_code == 0
        assert result.stdout == ""

    def test_violations(self, tmp_path):
        """Test that violations are printed and the exit code is 1."""
        write_tree(tmp_path, {
            "a.py": "import numpy as np\n",
            "b.py": "import numpy as np\n",
            "c.py": "import numpy as npy\n",
        })

        result = self.runner.invoke(main, [str(tmp_path)])

        assert result.exit_code == 1
        assert result.stdout == (
            f'{os.path.join(str(tmp_path), "c.py")}:1:8: uses alias "npy" to import package "numpy". '
            'Use alias "np" instead.\n'
        )

    @pytest.mark.parametrize("flag", ["--verbose", "-v"])
    def test_verbose(self, tmp_path, flag):
        """Test the verbose flag."""
        write_tree(tmp_path, {"a.py": "import numpy as np\n", "b.py": "import numpy as npy\n"})

        result = self.runner.invoke(main, [flag, str(tmp_path)])

        assert result.exit_code == 1
        assert result.stdout.startswith('"numpy" is imported using multiple different aliases:\n')

    def test_recursive(self, tmp_path):
        """Test the recursive flag."""
        write_tree(tmp_path, {"a.py": "import numpy as np\n", "sub/b.py": "import numpy as npy\n"})

        assert self.runner.invoke(main, [str(tmp_path)]).exit_code == 0
        assert self.runner.invoke(main, ["-r", str(tmp_path)]).exit_code == 1

    def test_extraction_failure(self, tmp_path):
        """Test that an unparsable file exits with code 2 and no report."""
        write_tree(tmp_path, {"a.py": "import numpy as np\n", "b.py": "import numpy as\n"})

        result = self.runner.invoke(main, [str(tmp_path)])

        assert result.exit_code == 2
        assert "uses alias" not in result.stdout

    def test_deeply_nested_source(self, tmp_path):
        """Test that a valid file with a deeply nested expression is checked normally."""
        write_tree(tmp_path, {
            "a.py": "import numpy as np\nx = " + "+".join(["1"] * 990) + "\n",
            "b.py": "import numpy as np\n",
        })

        result = self.runner.invoke(main, [str(tmp_path)])

        assert result.exit_code == 0
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.stdout == ""

    def test_requires_package_path(self):
        """Test that at least one package path is required."""
        result = self.runner.invoke(main, [])

        assert result.exit_code == 2

    def test_version(self):
        """Test the version option."""
        result = self.runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
