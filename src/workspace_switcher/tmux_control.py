"""Tmux 会话管理 - 每个工作区一个独立会话"""

import logging
import os
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


def session_name_for(workspace_id: str) -> str:
    """工作区 ID 对应的 tmux 会话名

    tmux 会把会话名中的 '.' 和 ':' 替换为 '_'，这里预先做同样的替换，
    保证查找和创建使用同一个名字。
    """
    return workspace_id.replace('.', '_').replace(':', '_')


class TmuxController:
    """Tmux 控制器 - 工作区会话管理

    每个工作区对应一个 tmux 会话，切换工作区 = 切换 tmux 会话。
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

    def in_tmux(self) -> bool:
        """当前进程是否运行在 tmux 客户端内"""
        return bool(os.environ.get('TMUX'))

    # ========== 会话管理 ==========

    def list_sessions(self) -> list[str]:
        """列出所有会话名（没有 tmux server 时返回空列表）"""
        result = self._run('list-sessions', '-F', '#{session_name}')
        if result.returncode != 0:
            logger.debug(f"[tmux] 没有可用会话: {result.stderr.strip()}")
            return []
        return [line.strip() for line in result.stdout.split('\n') if line.strip()]

    def session_exists(self, session: str) -> bool:
        """检查会话是否存在（精确匹配）"""
        return self._run('has-session', '-t', f'={session}').returncode == 0

    def create_session(self, session: str, cwd: str) -> Optional[str]:
        """创建后台会话

        Args:
            session: 会话名
            cwd: 工作目录

        Returns:
            第一个 pane 的 ID，失败返回 None
        """
        result = self._run(
            'new-session',
            '-d',  # detached
            '-s', session,
            '-c', cwd,
            '-P', '-F', '#{pane_id}',
        )
        if result.returncode != 0:
            logger.error(f"[tmux] 创建会话 {session} 失败: {result.stderr.strip()}")
            return None
        pane = result.stdout.strip()
        logger.info(f"[tmux] 已创建会话 {session} (pane {pane})")
        return pane or None

    def switch_session(self, session: str) -> bool:
        """切换到会话

        在 tmux 内使用 switch-client；在 tmux 外则 attach（阻塞到客户端退出）。
        """
        target = f'={session}'
        if self.in_tmux():
            result = self._run('switch-client', '-t', target)
            if result.returncode != 0:
                logger.error(f"[tmux] 切换会话 {session} 失败: {result.stderr.strip()}")
            return result.returncode == 0

        try:
            return subprocess.run(['tmux', 'attach-session', '-t', target]).returncode == 0
        except FileNotFoundError:
            logger.error("[tmux] 未找到 tmux")
            return False

    def bind_key(self, key: str, command: str) -> bool:
        """绑定快捷键：在弹出窗口中运行命令"""
        result = self._run('bind-key', key, 'display-popup', '-E', command)
        if result.returncode != 0:
            logger.error(f"[tmux] 绑定快捷键 {key} 失败: {result.stderr.strip()}")
        return result.returncode == 0


def check_tmux() -> tuple[bool, str]:
    """检查 tmux 是否可用"""
    try:
        result = subprocess.run(['tmux', '-V'], capture_output=True, text=True)
        if result.returncode == 0:
            return True, result.stdout.strip()
        return False, "tmux 命令执行失败"
    except FileNotFoundError:
        return False, "未找到 tmux，请安装: sudo apt install tmux"
