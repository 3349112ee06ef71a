"""布局规划 - 把声明式 tab/pane 树转换为一系列二分操作

分屏方式（"剥离"）：对有 n 个子节点的内部节点，依次执行 n-1 次二分，
每次都分割最新创建、尚未划分的那个 pane：

    ┌─────────────────────┐      ┌──────┬──────────────┐      ┌──────┬──────┬──────┐
    │                     │  →   │  c1  │   (剩余)     │  →   │  c1  │  c2  │  c3  │
    └─────────────────────┘      └──────┴──────────────┘      └──────┴──────┴──────┘
                                   split 2/3                    split 1/2

第 k 次分割（k 从 0 开始）时：
    remaining = sum(weights[k:])
    fraction  = (remaining - weights[k]) / remaining     # 新 pane（剩余部分）的占比
被分割的 pane 保留 weights[k] / remaining，承载第 k 个子节点；
最终第 i 个子节点占原始空间的 weights[i] / sum(weights)。
"""

import logging
from typing import Optional, Sequence

from .errors import LayoutError
from .models import Internal, Leaf, PaneNode, SplitStep, TabTree
from .terminal.adapter import PaneControl, PaneHandle

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\n"


def split_fraction(index: int, weights: Sequence[float]) -> float:
    """计算第 index 次分割（从 0 开始）中新 pane 的占比

    Args:
        index: 分割序号，0 <= index < len(weights) - 1
        weights: 各子节点的权重（均为正数）

    Returns:
        新 pane 占被分割 pane 的比例
    """
    if not 0 <= index < len(weights) - 1:
        raise IndexError(f"split index {index} out of range for {len(weights)} children")
    remaining = sum(weights[index:])
    return (remaining - weights[index]) / remaining


def split_fractions(weights: Sequence[float]) -> list[float]:
    """按执行顺序返回全部 n-1 个分割比例"""
    return [split_fraction(i, weights) for i in range(len(weights) - 1)]


def partition(fractions: Sequence[float]) -> list[float]:
    """按剥离顺序应用分割比例，返回每个子 pane 占原始空间的比例"""
    shares = []
    remaining = 1.0
    for fraction in fractions:
        shares.append(remaining * (1 - fraction))
        remaining *= fraction
    shares.append(remaining)
    return shares


def plan(node: PaneNode) -> list[SplitStep]:
    """计算实现 pane 树所需的分割序列（先序：本节点的分割，再依次是各子节点的）

    纯函数，对同一棵树多次调用结果相同。
    """
    if isinstance(node, Leaf):
        return []

    steps = [
        SplitStep(node.direction, fraction)
        for fraction in split_fractions(node.weights)
    ]
    for child in node.children:
        steps.extend(plan(child.node))
    return steps


class LayoutPlanner:
    """通过 PaneControl 实现布局树"""

    def __init__(self, control: PaneControl):
        self.control = control

    def apply(self, pane: PaneHandle, node: PaneNode) -> bool:
        """在 pane 上实现 pane 树

        分割失败时放弃当前子树（已完成的兄弟子树不受影响），记录错误后返回 False。

        Returns:
            整棵子树是否全部成功
        """
        if isinstance(node, Leaf):
            return self._run_command(pane, node)

        if not isinstance(node, Internal):
            logger.error(f"[布局] 未知的 pane 节点类型: {type(node).__name__}")
            return False

        if len(node.children) == 1:
            return self.apply(pane, node.children[0].node)

        panes = [pane]
        current = pane
        failed = False
        for fraction in split_fractions(node.weights):
            try:
                current = self.control.split(current, node.direction, fraction)
            except LayoutError as e:
                logger.error(f"[布局] 创建分屏失败 ({pane}): {e}")
                failed = True
                break
            panes.append(current)

        ok = not failed
        for child_pane, child in zip(panes, node.children):
            if not self.apply(child_pane, child.node):
                ok = False
        return ok

    def _run_command(self, pane: PaneHandle, leaf: Leaf) -> bool:
        if not leaf.command:
            return True
        try:
            self.control.send_text(pane, leaf.command + LINE_TERMINATOR)
        except LayoutError as e:
            logger.error(f"[布局] 发送命令失败 ({pane}): {e}")
            return False
        return True

    def apply_tabs(
        self,
        first_pane: PaneHandle,
        tabs: TabTree,
        session: str,
        cwd: Optional[str] = None,
    ) -> bool:
        """按顺序创建 tab 并实现各自的 pane 树

        第一个 tab 复用 first_pane；其余 tab 新建。某个 tab 失败不影响后续 tab。

        Returns:
            是否全部成功
        """
        ok = True
        for i, tab in enumerate(tabs):
            if i == 0:
                pane = first_pane
                if tab.name:
                    self.control.rename_tab(pane, tab.name)
            else:
                try:
                    pane = self.control.new_tab(session, tab.name, cwd)
                except LayoutError as e:
                    logger.error(f"[布局] 创建 tab {i + 1} 失败: {e}")
                    ok = False
                    continue

            if not self.apply(pane, tab.root):
                ok = False
        return ok
