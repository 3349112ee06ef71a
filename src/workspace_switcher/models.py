"""数据模型定义"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """工作区条目来源"""
    DIRECTORY = "directory"
    WORKTREE = "worktree"
    DIRECTORY_HISTORY = "zoxide"
    SESSION = "workspace"


class Direction(Enum):
    """分屏方向（新 pane 出现在右侧或下方）"""
    RIGHT = "Right"
    BOTTOM = "Bottom"

    @classmethod
    def parse(cls, value: str) -> 'Direction':
        """按名称解析方向，大小写不敏感"""
        if isinstance(value, str):
            for direction in cls:
                if direction.value.lower() == value.strip().lower():
                    return direction
        raise ConfigurationError(
            f"Invalid direction '{value}'. Must be 'Right' or 'Bottom'"
        )


@dataclass
class Icons:
    """条目图标（按来源区分）"""
    directory: str = "📁"
    worktree: str = "🌳"
    zoxide: str = "⚡"
    workspace: str = "🖥️"

    def for_kind(self, kind: EntryKind) -> str:
        return getattr(self, kind.value)


# ========== 布局树 ==========

@dataclass(frozen=True)
class Leaf:
    """叶子 pane，可选地在其中执行一条命令"""
    command: Optional[str] = None


@dataclass(frozen=True)
class Child:
    """内部节点的子节点及其权重"""
    node: 'PaneNode'
    weight: float = 1


def _is_valid_weight(weight) -> bool:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return False
    return math.isfinite(weight) and weight > 0


@dataclass(frozen=True)
class Internal:
    """内部节点：按 direction 把当前 pane 分成若干子 pane

    权重不合法（非正数、非数值）的子节点按权重 1 处理，并为该子节点记录一条警告。
    """
    direction: Direction
    children: tuple[Child, ...]

    def __post_init__(self):
        children = tuple(self.children)
        if not children:
            raise ConfigurationError("Internal pane node must have at least one child")

        normalized = []
        for index, child in enumerate(children):
            if not _is_valid_weight(child.weight):
                logger.warning(
                    f"[布局] 子 pane {index + 1} 的 size 无效 ({child.weight!r})，按 1 处理"
                )
                child = Child(child.node, 1)
            normalized.append(child)
        object.__setattr__(self, 'children', tuple(normalized))

    @property
    def weights(self) -> list[float]:
        return [child.weight for child in self.children]


PaneNode = Union[Leaf, Internal]


@dataclass(frozen=True)
class TabSpec:
    """一个 tab（tmux window）及其 pane 树"""
    root: PaneNode = field(default_factory=Leaf)
    name: Optional[str] = None


TabTree = tuple[TabSpec, ...]


@dataclass(frozen=True)
class SplitStep:
    """一次二分操作

    Attributes:
        direction: 分屏方向
        fraction: 新建 pane 占被分割 pane 的比例（0 < fraction < 1）
    """
    direction: Direction
    fraction: float


# ========== 工作区条目 ==========

@dataclass
class WorkspaceEntry:
    """可选择的工作区

    id 是去重键（通常是绝对路径或 tmux 会话名）。
    """
    id: str
    kind: EntryKind
    layout: Optional[TabTree] = None

    def label(self, icons: Icons, home: Optional[str] = None) -> str:
        """显示用标签：图标 + 路径（home 前缀替换为 ~）"""
        display = self.id
        if home and (display == home or display.startswith(home.rstrip('/') + '/')):
            display = '~' + display[len(home.rstrip('/')):]
        return f"{icons.for_kind(self.kind)}  {display}"
