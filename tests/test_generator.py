import datetime
import io
import shlex

import pytest

from contrib_drawer.dates import DateMapper
from contrib_drawer.generator import PREAMBLE, CommitScriptGenerator, commit_count
from contrib_drawer.models import CommitSpec

TODAY = datetime.date(2024, 6, 12)


@pytest.fixture
def make_generator():
    def factory(names=("No One",), emails=("example@example.org",), messages=("Initial commit", "Fix typo")):
        return CommitScriptGenerator(names, emails, messages, DateMapper(TODAY))
    return factory


def commit_line(date, minute="00", name="'No One'", email="example@example.org", message="'Initial commit'"):
    return (
        f"GIT_AUTHOR_DATE='{date} 10:{minute}:00' GIT_COMMITTER_DATE='{date} 10:{minute}:00' "
        f"GIT_AUTHOR_NAME={name} GIT_COMMITTER_NAME={name} "
        f"GIT_AUTHOR_EMAIL={email} GIT_COMMITTER_EMAIL={email} "
        f"git commit --allow-empty --allow-empty-message -m {message}"
    )


def test_all_zero_grid_is_only_the_preamble(make_generator):
    lines = make_generator().generate_lines(((0, 0, 0), (0, 0, 0)))
    assert lines == ["#!/bin/sh", "", "git add .", ""]


def test_empty_grid_is_only_the_preamble(make_generator):
    assert make_generator().generate_script(()) == "#!/bin/sh\n\ngit add .\n\n"


def test_two_single_commits(make_generator):
    lines = make_generator().generate_lines(((1, 0), (0, 1)))
    assert lines == list(PREAMBLE) + [
        commit_line("2023-06-11"),
        "",
        commit_line("2023-06-19", message="'Fix typo'"),
        "",
    ]


def test_cell_intensity_sets_commit_count_and_minutes(make_generator):
    lines = make_generator(messages=("m",)).generate_lines(((12,),))
    body = lines[len(PREAMBLE):]
    assert len(body) == 13
    assert body[-1] == ""
    minutes = [shlex.split(line)[0].split(":")[1] for line in body[:-1]]
    assert minutes == [f"{m:02d}" for m in range(12)]


def test_pools_rotate_across_cells(make_generator):
    generator = make_generator(names=("A", "B", "C"), emails=("a@x", "b@x"), messages=("one", "two", "three", "four"))
    blocks = list(generator.iter_commits(((2, 0, 3),)))
    commits = [commit for block in blocks for commit in block]
    assert [c.name for c in commits] == ["A", "B", "C", "A", "B"]
    assert [c.email for c in commits] == ["a@x", "b@x", "a@x", "b@x", "a@x"]
    assert [c.message for c in commits] == ["one", "two", "three", "four", "one"]
    assert [len(block) for block in blocks] == [2, 3]
    assert [c.minute for c in blocks[1]] == [0, 1, 2]
    assert blocks[1][0].date == datetime.date(2023, 6, 25)


def test_unsafe_values_stay_single_shell_words():
    commit = CommitSpec(
        name="O'Brien $(whoami)",
        email="a b@example.org",
        message='fix "quotes"; rm -rf / `ls` && echo $HOME',
        date=datetime.date(2024, 1, 7),
        minute=5,
    )
    words = shlex.split(CommitScriptGenerator.format_commit(commit))
    assert words == [
        "GIT_AUTHOR_DATE=2024-01-07 10:05:00",
        "GIT_COMMITTER_DATE=2024-01-07 10:05:00",
        "GIT_AUTHOR_NAME=O'Brien $(whoami)",
        "GIT_COMMITTER_NAME=O'Brien $(whoami)",
        "GIT_AUTHOR_EMAIL=a b@example.org",
        "GIT_COMMITTER_EMAIL=a b@example.org",
        "git", "commit", "--allow-empty", "--allow-empty-message",
        "-m", 'fix "quotes"; rm -rf / `ls` && echo $HOME',
    ]


def test_empty_message_is_quoted():
    commit = CommitSpec("n", "e@x", "", datetime.date(2024, 1, 7), 0)
    assert CommitScriptGenerator.format_commit(commit).endswith("-m ''")


def test_write_script_matches_generate_script(make_generator):
    grid = ((0, 2), (1, 0))
    stream = io.StringIO()
    make_generator().write_script(grid, stream)
    assert stream.getvalue() == make_generator().generate_script(grid)
    assert stream.getvalue().endswith("\n\n")


def test_commit_count():
    assert commit_count(()) == 0
    assert commit_count(((1, 0, 35), (2, 0, 0))) == 38


def test_multiline_message_stays_one_command():
    commit = CommitSpec("n", "e@x", "Subject\n\nBody text", datetime.date(2024, 1, 7), 0)
    line = CommitScriptGenerator.format_commit(commit)
    assert line.count("\n") == 2
    assert shlex.split(line)[-2:] == ["-m", "Subject\n\nBody text"]
