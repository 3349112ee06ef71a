"""workspace-switcher - 工作区选择 + tmux session 管理

选项来源（按优先级去重）：
- 已存在的 tmux 会话
- 配置中的目录与 git worktree 根目录
- zoxide 目录历史

选中后创建或切换到对应的 tmux 会话，并按配置的 tab/pane 树分屏。
"""

__version__ = "0.1.0"

# 数据模型
from .models import (
    Direction,
    EntryKind,
    Internal,
    Leaf,
    Child,
    SplitStep,
    TabSpec,
    WorkspaceEntry,
)

# 配置
from .config import WorkspaceContext, load_context

# 聚合与布局
from .aggregator import aggregate, collect_choices
from .layout import LayoutPlanner, plan, split_fraction, split_fractions

# 激活
from .activator import Activator

__all__ = [
    # 数据模型
    "Direction",
    "EntryKind",
    "Internal",
    "Leaf",
    "Child",
    "SplitStep",
    "TabSpec",
    "WorkspaceEntry",
    # 配置
    "WorkspaceContext",
    "load_context",
    # 聚合与布局
    "aggregate",
    "collect_choices",
    "LayoutPlanner",
    "plan",
    "split_fraction",
    "split_fractions",
    # 激活
    "Activator",
]
