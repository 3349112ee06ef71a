"""Shell 命令执行"""

import logging
import os
import subprocess
import sys
from typing import Optional

logger = logging.getLogger(__name__)


class ProcessRunner:
    """通过平台 shell 执行命令行

    POSIX 下使用 $SHELL -c（未设置时为 /bin/sh），Windows 下使用 cmd /c。
    不设置超时：外部命令挂起会阻塞调用方。
    """

    def __init__(self, shell: Optional[str] = None, windows: Optional[bool] = None):
        self.windows = sys.platform.startswith('win') if windows is None else windows
        self.shell = shell or os.environ.get('SHELL') or '/bin/sh'

    def build_args(self, command: str) -> list[str]:
        """构建实际执行的参数列表"""
        if self.windows:
            return ['cmd', '/c', command]
        return [self.shell, '-c', command]

    def run(self, command: str) -> tuple[str, Optional[str]]:
        """执行命令

        Args:
            command: 命令行

        Returns:
            (标准输出, 错误信息)。成功时错误信息为 None，失败时标准输出为空字符串
        """
        if not isinstance(command, str) or not command:
            return "", "Invalid command: expected string"

        try:
            result = subprocess.run(
                self.build_args(command), capture_output=True, text=True,
                errors='replace',
            )
        except OSError as e:
            error = f"Failed to run '{command}': {e}"
            logger.debug(f"[命令] {error}")
            return "", error

        if result.returncode != 0:
            stderr = (result.stderr or '').strip() or f"exit status {result.returncode}"
            error = f"Failed to run '{command}': {stderr}"
            logger.debug(f"[命令] {error}")
            return "", error

        return result.stdout or "", None
