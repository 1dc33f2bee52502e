"""Shared test fixtures and Hypothesis strategies for gcc-makedepend tests."""

import shlex
import sys
import textwrap
from pathlib import Path

import pytest
from hypothesis import strategies as st
from hypothesis.strategies import composite

from gccmakedepend.core.makefile import MARKER

# Stand-in for ``gcc -MM``. For every non-option argument ``dir/name.c`` it
# prints a rule for name.o folded over two lines. The argv it was
# called with is recorded in argv.txt next to the script, one item per line.
#   broken.c  write a diagnostic and exit with status 1
#   noisy.c   write a diagnostic to stderr before the rules
FAKE_COMPILER = textwrap.dedent(
    """\
    import sys
    from pathlib import Path

    args = sys.argv[1:]
    Path(__file__).with_name("argv.txt").write_text("\\n".join(args) + "\\n")

    if "broken.c" in args:
        sys.stderr.write("fatal error: missing.h: No such file or directory\\n")
        sys.exit(1)
    if "noisy.c" in args:
        sys.stderr.write("warning: something odd\\n")
        sys.stderr.flush()

    for arg in args[1:]:
        if arg.startswith("-"):
            continue
        stem = Path(arg).stem
        sys.stdout.write(f"{stem}.o: {arg} \\\\\\n  {stem}.h\\n")
    """
)


@pytest.fixture
def fake_compiler(tmp_path: Path) -> list[str]:
    """Compiler command in argv form that runs the fake ``-MM`` script."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "fake_cc.py"
    script.write_text(FAKE_COMPILER)
    return [sys.executable, str(script)]


@pytest.fixture
def fake_compiler_command(fake_compiler: list[str]) -> str:
    """The fake compiler as a single shell-quoted string, as given to -gcc."""
    return shlex.join(fake_compiler)


@pytest.fixture
def recorded_argv(fake_compiler: list[str]):
    """Return a function reading the argv of the last fake compiler run."""
    log = Path(fake_compiler[1]).with_name("argv.txt")

    def read() -> list[str]:
        return log.read_text().splitlines()

    return read


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory that is also the working directory."""
    directory = tmp_path / "project"
    directory.mkdir()
    monkeypatch.chdir(directory)
    monkeypatch.delenv("CC", raising=False)
    return directory


# Lines of hand-written makefile content. Anything goes except the marker
# itself and line breaks, which the generator adds as LF or CRLF.
makefile_line = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="\r\n"),
    max_size=40,
).filter(lambda line: line != MARKER)


@composite
def makefile_prefix(draw: st.DrawFn) -> str:
    """Generate hand-written makefile content without a marker line."""
    lines = draw(st.lists(makefile_line, max_size=15))
    endings = draw(
        st.lists(st.sampled_from(["\n", "\r\n"]), min_size=len(lines), max_size=len(lines))
    )
    return "".join(line + ending for line, ending in zip(lines, endings))


target_name = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=10)


@composite
def dependency_rules(draw: st.DrawFn) -> list[str]:
    """Generate ``-MM`` style output lines: rules with continuation lines.

    Every rule starts with a non-whitespace line; continuation lines start
    with two spaces, as gcc folds them.
    """
    lines: list[str] = []
    for _ in range(draw(st.integers(min_value=0, max_value=6))):
        stem = draw(target_name)
        headers = draw(st.lists(target_name, max_size=4))
        if headers:
            lines.append(f"{stem}.o: {stem}.c \\\n")
            for i, header in enumerate(headers):
                tail = " \\\n" if i < len(headers) - 1 else "\n"
                lines.append(f"  {header}.h{tail}")
        else:
            lines.append(f"{stem}.o: {stem}.c\n")
    return lines


prefix_list = st.lists(
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz/._", min_size=1, max_size=12),
    max_size=4,
)
