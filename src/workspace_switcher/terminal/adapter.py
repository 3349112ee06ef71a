"""Pane 控制抽象接口

布局规划器只通过此接口产生副作用，便于替换为 tmux 之外的实现或测试替身。
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import Direction

# pane 句柄（tmux 中为 pane ID，如 "%3"）
PaneHandle = str


class PaneControl(ABC):
    """Pane 控制接口"""

    @abstractmethod
    def split(self, pane: PaneHandle, direction: Direction, fraction: float) -> PaneHandle:
        """分割 pane

        Args:
            pane: 被分割的 pane
            direction: 新 pane 出现的方向
            fraction: 新 pane 占被分割 pane 的比例（0 < fraction < 1）

        Returns:
            新 pane 的句柄

        Raises:
            LayoutError: 无法创建新 pane
        """
        pass

    @abstractmethod
    def send_text(self, pane: PaneHandle, text: str) -> None:
        """向 pane 发送文本

        Raises:
            LayoutError: 发送失败
        """
        pass

    @abstractmethod
    def new_tab(self, session: str, name: Optional[str] = None,
                cwd: Optional[str] = None) -> PaneHandle:
        """在会话中新建 tab，返回其第一个 pane

        Raises:
            LayoutError: 创建失败
        """
        pass

    @abstractmethod
    def rename_tab(self, pane: PaneHandle, name: str) -> None:
        """重命名 pane 所在的 tab"""
        pass
