"""激活工作区 - 创建或切换 tmux 会话并应用布局

工作流程：
1. 已存在的会话：直接切换
2. 新工作区：以 id 为工作目录创建后台会话
3. 按配置创建 tab 与分屏
4. 切换到（tmux 内）或 attach（tmux 外）该会话
"""

import logging
from typing import Optional

from .config import WorkspaceContext
from .errors import ResolutionError
from .layout import LayoutPlanner
from .models import EntryKind, WorkspaceEntry
from .paths import expand_home
from .terminal import PaneControl, TmuxPaneControl
from .tmux_control import TmuxController, session_name_for

logger = logging.getLogger(__name__)


class Activator:
    """工作区激活器"""

    def __init__(
        self,
        tmux: Optional[TmuxController] = None,
        control: Optional[PaneControl] = None,
    ):
        self.tmux = tmux or TmuxController()
        self.planner = LayoutPlanner(control or TmuxPaneControl())

    def activate(self, entry: WorkspaceEntry, context: WorkspaceContext) -> bool:
        """创建或切换到工作区

        Returns:
            是否成功切换到目标会话
        """
        if entry.kind == EntryKind.SESSION:
            logger.info(f"[激活] 切换到已有会话: {entry.id}")
            return self.tmux.switch_session(entry.id)

        session = session_name_for(entry.id)
        if self.tmux.session_exists(session):
            logger.info(f"[激活] 会话已存在，直接切换: {session}")
            return self.tmux.switch_session(session)

        try:
            cwd = expand_home(entry.id, context.home)
        except ResolutionError as e:
            logger.error(f"[激活] 展开路径 '{entry.id}' 失败: {e}")
            cwd = entry.id

        first_pane = self.tmux.create_session(session, cwd)
        if not first_pane:
            logger.error(f"[激活] 无法为 '{entry.id}' 创建会话")
            return False

        if entry.layout:
            if not self.planner.apply_tabs(first_pane, entry.layout, session, cwd):
                logger.warning(f"[激活] 会话 {session} 的布局未完全创建")

        return self.tmux.switch_session(session)
