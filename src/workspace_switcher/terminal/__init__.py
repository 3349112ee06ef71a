"""Pane 控制模块

提供布局规划器使用的 pane 操作接口及其 tmux 实现。

使用示例：
    from workspace_switcher.terminal import TmuxPaneControl
    from workspace_switcher.models import Direction

    control = TmuxPaneControl()
    new_pane = control.split('%0', Direction.RIGHT, 0.5)
    control.send_text(new_pane, 'htop\\n')
"""

from .adapter import PaneControl, PaneHandle
from .tmux_pane_control import TmuxPaneControl

__all__ = [
    'PaneControl',
    'PaneHandle',
    'TmuxPaneControl',
]
