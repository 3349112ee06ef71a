"""聚合测试"""

import os

import pytest

from workspace_switcher.aggregator import aggregate, collect_choices, find_choice
from workspace_switcher.config import ConfiguredEntry, WorkspaceContext
from workspace_switcher.models import EntryKind, Leaf, TabSpec, WorkspaceEntry
from workspace_switcher.process import ProcessRunner

from conftest import FakeRunner, FakeTmux

HISTORY = "zoxide query -l"


def entry(id, kind=EntryKind.DIRECTORY, layout=None):
    return WorkspaceEntry(id=id, kind=kind, layout=layout)


class TestAggregate:
    """aggregate 测试"""

    def test_first_seen_wins(self):
        layout = (TabSpec(root=Leaf("nvim")),)
        result = aggregate([
            [entry("a", EntryKind.SESSION)],
            [entry("a", layout=layout), entry("b", layout=layout)],
            [entry("b", EntryKind.DIRECTORY_HISTORY), entry("c", EntryKind.DIRECTORY_HISTORY)],
        ])
        assert [(e.id, e.kind) for e in result] == [
            ("a", EntryKind.SESSION),
            ("b", EntryKind.DIRECTORY),
            ("c", EntryKind.DIRECTORY_HISTORY),
        ]
        # 会话条目不继承配置中的布局
        assert result[0].layout is None
        assert result[1].layout == layout

    def test_no_duplicate_ids(self):
        sources = [
            [entry(str(i % 3)) for i in range(10)],
            [entry(str(i % 5)) for i in range(10)],
        ]
        ids = [e.id for e in aggregate(sources)]
        assert len(ids) == len(set(ids))
        assert ids == ["0", "1", "2", "3", "4"]

    def test_order_stable_within_source(self):
        result = aggregate([[entry("z"), entry("a"), entry("m")]])
        assert [e.id for e in result] == ["z", "a", "m"]

    def test_empty_and_missing_sources(self):
        assert aggregate([[], None, [entry("x")]]) == [entry("x")]
        assert aggregate([]) == []


class TestCollectChoices:
    """collect_choices 测试"""

    def test_priority_order(self):
        context = WorkspaceContext(
            entries=(
                ConfiguredEntry(path="~/proj"),
                ConfiguredEntry(path="/repo", type="worktreeroot"),
            ),
            home="/home/u",
        )
        runner = FakeRunner(outputs={
            "git -C /repo worktree list --porcelain":
                "worktree /repo\nHEAD abc\nbranch main\n\nworktree /repo-feature\n",
            HISTORY: "/home/u/proj\n/var/log\n/repo-feature\n",
        })
        tmux = FakeTmux(sessions=["main"])

        result = collect_choices(context, runner, tmux)

        assert [(e.id, e.kind) for e in result] == [
            ("main", EntryKind.SESSION),
            ("/home/u/proj", EntryKind.DIRECTORY),
            ("/repo", EntryKind.WORKTREE),
            ("/repo-feature", EntryKind.WORKTREE),
            ("/var/log", EntryKind.DIRECTORY_HISTORY),
        ]

    def test_static_entry_beats_history(self):
        context = WorkspaceContext(entries=(ConfiguredEntry(path="/home/u/proj"),), home="/home/u")
        runner = FakeRunner(outputs={HISTORY: "/home/u/proj\n"})
        result = collect_choices(context, runner, FakeTmux())
        assert len(result) == 1
        assert result[0].kind == EntryKind.DIRECTORY

    def test_session_beats_configured(self):
        layout = (TabSpec(root=Leaf("make")),)
        context = WorkspaceContext(
            entries=(ConfiguredEntry(path="/work", tabs=layout),), home="/home/u"
        )
        result = collect_choices(context, FakeRunner(), FakeTmux(sessions=["/work"]))
        assert len(result) == 1
        assert result[0].kind == EntryKind.SESSION
        assert result[0].layout is None

    def test_failing_sources_do_not_block_others(self):
        context = WorkspaceContext(
            entries=(
                ConfiguredEntry(path="/broken", type="worktreeroot"),
                ConfiguredEntry(path="/ok"),
            ),
            home="/home/u",
        )
        runner = FakeRunner(errors={
            "git -C /broken worktree list --porcelain": "not a git repository",
            HISTORY: "zoxide: command not found",
        })
        result = collect_choices(context, runner, FakeTmux())
        assert [e.id for e in result] == ["/ok"]

    def test_sources_run_sequentially_in_priority_order(self):
        context = WorkspaceContext(entries=(ConfiguredEntry(path="/r", type="worktreeroot"),))
        runner = FakeRunner()
        collect_choices(context, runner, FakeTmux())
        assert runner.commands == ["git -C /r worktree list --porcelain", HISTORY]


class TestFindChoice:
    """find_choice 测试"""

    def test_expands_home(self):
        choices = [entry("/home/u/proj")]
        context = WorkspaceContext(home="/home/u")
        assert find_choice(choices, "~/proj", context) is choices[0]

    def test_missing(self):
        assert find_choice([entry("/a")], "/b", WorkspaceContext(home="/home/u")) is None


class TestCollectNonUtf8:
    """目录历史含非 UTF-8 字节"""

    @pytest.mark.skipif(not os.path.exists("/bin/sh"), reason="需要 /bin/sh")
    def test_history_with_latin1_path(self):
        context = WorkspaceContext(history_command="printf '/tmp/caf\\351\\n/ok\\n'")
        choices = collect_choices(context, ProcessRunner(shell="/bin/sh", windows=False), FakeTmux())
        assert [c.id for c in choices][-1] == "/ok"
        assert len(choices) == 2
