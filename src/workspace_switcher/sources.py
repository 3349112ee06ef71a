"""工作区来源收集

四个相互独立的来源，每个都返回有序的条目列表：
- 配置中的静态目录
- 配置中的 worktree 根目录（每个 git worktree 一个条目）
- 目录历史（zoxide）
- 已存在的 tmux 会话

任何来源失败时记录日志并返回空列表，不影响其他来源。
"""

import logging
import shlex

from .config import ConfiguredEntry, WorkspaceContext
from .errors import ExecutionError, ResolutionError
from .models import EntryKind, WorkspaceEntry
from .paths import expand_home
from .process import ProcessRunner
from .tmux_control import TmuxController

logger = logging.getLogger(__name__)

WORKTREE_PREFIX = "worktree "


def parse_worktree_list(output: str) -> list[str]:
    """解析 git worktree list --porcelain 的输出，每条记录一个路径"""
    paths = []
    for line in output.splitlines():
        if line.startswith(WORKTREE_PREFIX):
            path = line[len(WORKTREE_PREFIX):].strip()
            if path:
                paths.append(path)
    return paths


def list_worktrees(root: str, runner: ProcessRunner) -> list[str]:
    """列出仓库的所有 worktree

    Raises:
        ExecutionError: git 命令执行失败
    """
    output, error = runner.run(f"git -C {shlex.quote(root)} worktree list --porcelain")
    if error:
        raise ExecutionError(error)
    return parse_worktree_list(output)


def directory_entry(entry: ConfiguredEntry, context: WorkspaceContext) -> list[WorkspaceEntry]:
    """静态目录条目"""
    try:
        path = expand_home(entry.path, context.home)
    except ResolutionError as e:
        logger.error(f"[目录] 展开路径 '{entry.path}' 失败: {e}")
        return []
    return [WorkspaceEntry(id=path, kind=EntryKind.DIRECTORY, layout=entry.tabs or None)]


def worktree_entries(
    entry: ConfiguredEntry,
    context: WorkspaceContext,
    runner: ProcessRunner,
) -> list[WorkspaceEntry]:
    """worktree 根目录展开为每个 worktree 一个条目，共享该根的布局"""
    try:
        root = expand_home(entry.path, context.home)
    except ResolutionError as e:
        logger.error(f"[worktree] 展开路径 '{entry.path}' 失败: {e}")
        return []

    try:
        paths = list_worktrees(root, runner)
    except ExecutionError as e:
        logger.error(f"[worktree] 获取 '{root}' 的 worktree 失败: {e}")
        return []

    return [
        WorkspaceEntry(id=path, kind=EntryKind.WORKTREE, layout=entry.tabs or None)
        for path in paths
    ]


def configured_entries(context: WorkspaceContext, runner: ProcessRunner) -> list[WorkspaceEntry]:
    """按配置顺序收集静态目录与 worktree 条目"""
    entries = []
    for entry in context.entries:
        if entry.type == 'worktreeroot':
            entries.extend(worktree_entries(entry, context, runner))
        else:
            entries.extend(directory_entry(entry, context))
    return entries


def history_entries(context: WorkspaceContext, runner: ProcessRunner) -> list[WorkspaceEntry]:
    """目录历史条目（每行一个目录）"""
    output, error = runner.run(context.history_command)
    if error:
        logger.warning(f"[zoxide] 目录历史不可用: {error}")
        return []

    return [
        WorkspaceEntry(id=line.strip(), kind=EntryKind.DIRECTORY_HISTORY)
        for line in output.splitlines()
        if line.strip()
    ]


def session_entries(tmux: TmuxController) -> list[WorkspaceEntry]:
    """已存在的 tmux 会话条目"""
    return [
        WorkspaceEntry(id=name, kind=EntryKind.SESSION)
        for name in tmux.list_sessions()
    ]
