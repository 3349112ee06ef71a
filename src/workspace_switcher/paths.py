"""路径展开"""

import os
from pathlib import Path
from typing import Optional

from .errors import ResolutionError


def home_dir() -> Optional[str]:
    """获取当前用户 home 目录，无法确定时返回 None"""
    try:
        return str(Path.home())
    except (RuntimeError, KeyError):
        return os.environ.get('HOME') or None


def expand_home(path: str, home: Optional[str] = None) -> str:
    """展开以 ~ 开头的路径

    Args:
        path: 可能以 ~ 开头的路径
        home: home 目录，None 表示自动检测

    Returns:
        展开后的路径（不以 ~ 开头的路径原样返回）

    Raises:
        ResolutionError: 路径不是字符串，或需要展开但无法确定 home 目录
    """
    if not isinstance(path, str) or not path:
        raise ResolutionError("Invalid path: expected string")

    if not path.startswith('~'):
        return path

    home = home or home_dir()
    if not home:
        raise ResolutionError("Unable to determine home directory")
    return home.rstrip('/') + path[1:]
