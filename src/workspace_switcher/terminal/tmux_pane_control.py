"""tmux pane 控制

使用 tmux split-window / new-window / send-keys 实现 PaneControl。
"""

import logging
import subprocess
from typing import Optional

from ..errors import LayoutError
from ..models import Direction
from .adapter import PaneControl, PaneHandle

logger = logging.getLogger(__name__)


def to_percent(fraction: float) -> int:
    """分割比例转换为 tmux 百分比（1 ~ 99）"""
    return min(99, max(1, round(fraction * 100)))


class TmuxPaneControl(PaneControl):
    """tmux pane 控制

    tmux 的分屏参数与方向名相反：
    - -h: 左右排列（新 pane 在右侧），对应 Direction.RIGHT
    - -v: 上下排列（新 pane 在下方），对应 Direction.BOTTOM
    """

    def _run(self, *args, timeout: float = 2.0) -> subprocess.CompletedProcess:
        """执行 tmux 命令"""
        cmd = ['tmux'] + list(args)
        try:
            return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired:
            return subprocess.CompletedProcess(cmd, 1, '', 'timeout')
        except FileNotFoundError:
            return subprocess.CompletedProcess(cmd, 1, '', 'tmux not found')

    def split(self, pane: PaneHandle, direction: Direction, fraction: float) -> PaneHandle:
        flag = '-h' if direction == Direction.RIGHT else '-v'
        result = self._run(
            'split-window', flag,
            '-t', pane,
            '-l', f'{to_percent(fraction)}%',
            '-P', '-F', '#{pane_id}',
        )
        new_pane = result.stdout.strip()
        if result.returncode != 0 or not new_pane:
            raise LayoutError(result.stderr.strip() or "创建分屏失败")
        logger.debug(f"[tmux] split {pane} {direction.value} {fraction:.3f} -> {new_pane}")
        return new_pane

    def send_text(self, pane: PaneHandle, text: str) -> None:
        result = self._run('send-keys', '-t', pane, '-l', text)
        if result.returncode != 0:
            raise LayoutError(result.stderr.strip() or "发送文本失败")

    def new_tab(self, session: str, name: Optional[str] = None,
                cwd: Optional[str] = None) -> PaneHandle:
        args = ['new-window', '-t', f'={session}:', '-P', '-F', '#{pane_id}']
        if name:
            args.extend(['-n', name])
        if cwd:
            args.extend(['-c', cwd])
        result = self._run(*args)
        pane = result.stdout.strip()
        if result.returncode != 0 or not pane:
            raise LayoutError(result.stderr.strip() or "创建 tab 失败")
        return pane

    def rename_tab(self, pane: PaneHandle, name: str) -> None:
        result = self._run('rename-window', '-t', pane, name)
        if result.returncode != 0:
            logger.warning(f"[tmux] 重命名 tab 失败 ({pane}): {result.stderr.strip()}")
