"""工作区聚合 - 按优先级合并各来源并去重"""

import logging
from typing import Iterable, Optional, Sequence

from .config import WorkspaceContext
from .errors import ResolutionError
from .models import WorkspaceEntry
from .paths import expand_home
from .process import ProcessRunner
from .sources import configured_entries, history_entries, session_entries
from .tmux_control import TmuxController

logger = logging.getLogger(__name__)


def aggregate(sources: Iterable[Optional[Sequence[WorkspaceEntry]]]) -> list[WorkspaceEntry]:
    """合并多个来源的条目

    sources 已按优先级排列。同一 id 只保留第一次出现的条目（包括其布局），
    后出现的重复条目整体丢弃。每个来源内部的顺序保持不变。

    Args:
        sources: 按优先级排列的条目序列，None 视为空

    Returns:
        去重后的条目列表
    """
    seen: set[str] = set()
    entries: list[WorkspaceEntry] = []
    for source in sources:
        for entry in source or ():
            if not entry.id or entry.id in seen:
                continue
            seen.add(entry.id)
            entries.append(entry)
    return entries


def collect_choices(
    context: WorkspaceContext,
    runner: Optional[ProcessRunner] = None,
    tmux: Optional[TmuxController] = None,
) -> list[WorkspaceEntry]:
    """收集并聚合全部工作区选项

    优先级：已存在的会话 > 配置条目（静态目录与 worktree）> 目录历史。
    各来源依次执行。
    """
    runner = runner or ProcessRunner()
    tmux = tmux or TmuxController()

    sessions = session_entries(tmux)
    configured = configured_entries(context, runner)
    history = history_entries(context, runner)

    choices = aggregate([sessions, configured, history])
    logger.debug(
        f"[聚合] 会话={len(sessions)}, 配置={len(configured)}, "
        f"历史={len(history)}, 合计={len(choices)}"
    )
    return choices


def find_choice(
    choices: Sequence[WorkspaceEntry],
    key: str,
    context: WorkspaceContext,
) -> Optional[WorkspaceEntry]:
    """按 id 查找选项（key 先做 ~ 展开）"""
    try:
        key = expand_home(key, context.home)
    except ResolutionError as e:
        logger.error(f"[聚合] 展开路径 '{key}' 失败: {e}")
        return None

    for choice in choices:
        if choice.id == key:
            return choice
    return None
