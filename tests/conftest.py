"""Shared test fixtures — sample diffs, parsed sources, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path
from typing import Callable, List

import pytest

from agentmap.extract.definitions import extract_definitions
from agentmap.extract.models import Definition
from agentmap.languages.models import Language
from agentmap.parser.grammar import SourceParser


@pytest.fixture
def parse_source() -> Callable:
    """Parse dedented source text and return the tree's root node."""
    parser = SourceParser()

    def _parse(code: str, language: Language):
        return parser.parse(textwrap.dedent(code), language).root_node

    return _parse


@pytest.fixture
def definitions_of(parse_source) -> Callable[[str, Language], List[Definition]]:
    """Extract definitions from a source snippet."""

    def _extract(code: str, language: Language) -> List[Definition]:
        return extract_definitions(parse_source(code, language), language)

    return _extract


@pytest.fixture
def sample_diff_modified() -> str:
    """A zero-context diff touching two regions of one file."""
    return textwrap.dedent("""\
        diff --git a/src/app.ts b/src/app.ts
        index 1234567..abcdef0 100644
        --- a/src/app.ts
        +++ b/src/app.ts
        @@ -3,0 +4,2 @@ import x
        +const a = 1
        +const b = 2
        @@ -20,2 +22 @@ function main() {
        -  oldOne()
        -  oldTwo()
        +  replacement()
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    """A diff that adds a whole file."""
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,3 @@
        +def greet(name):
        +    return f"Hello, {name}!"
        +
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    """A diff that deletes a file."""
    return textwrap.dedent("""\
        diff --git a/gone.py b/gone.py
        deleted file mode 100644
        index abc1234..0000000
        --- a/gone.py
        +++ /dev/null
        @@ -1,2 +0,0 @@
        -x = 1
        -y = 2
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A diff with a binary file."""
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A diff with a renamed file."""
    return textwrap.dedent("""\
        diff --git a/old_name.py b/new_name.py
        similarity index 97%
        rename from old_name.py
        rename to new_name.py
        index abc1234..def5678 100644
        --- a/old_name.py
        +++ b/new_name.py
        @@ -1,0 +2,1 @@
        +# New line added after rename
    """)


@pytest.fixture
def sample_diff_mode_only() -> str:
    """A diff with only file mode change."""
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff with 'No newline at end of file' marker."""
    return textwrap.dedent("""\
        diff --git a/data.py b/data.py
        index 0000000..abc1234 100644
        --- a/data.py
        +++ b/data.py
        @@ -4 +4 @@
        -old = 1
        \\ No newline at end of file
        +new = 1
        \\ No newline at end of file
    """)


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    )
    return result.stdout


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n\nA small fixture project.\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def run_git() -> Callable[..., str]:
    """``run_git(repo, *args)`` — run git in *repo*, returning stdout."""
    return git
