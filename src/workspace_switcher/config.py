"""配置管理模块"""

import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import Optional

from .errors import ConfigurationError
from .models import Child, Direction, Icons, Internal, Leaf, PaneNode, TabSpec, TabTree
from .paths import home_dir

logger = logging.getLogger(__name__)

# 默认配置文件路径
CONFIG_DIR = Path.home() / '.config' / 'workspace-switcher'
DEFAULT_CONFIG_PATH = CONFIG_DIR / 'config.yaml'

DEFAULT_HISTORY_COMMAND = "zoxide query -l"

ENTRY_TYPES = ('directory', 'worktreeroot')


@dataclass(frozen=True)
class ConfiguredEntry:
    """已校验的配置条目

    Attributes:
        path: 原始路径（可能以 ~ 开头，展开推迟到收集阶段）
        type: directory 或 worktreeroot
        tabs: 布局树（可为空）
    """
    path: str
    type: str = 'directory'
    tabs: TabTree = ()


@dataclass(frozen=True)
class WorkspaceContext:
    """一次配置加载得到的只读上下文

    在加载配置时构建一次，之后作为参数传给收集、聚合和激活流程。
    """
    entries: tuple[ConfiguredEntry, ...] = ()
    icons: Icons = field(default_factory=Icons)
    home: Optional[str] = None
    history_command: str = DEFAULT_HISTORY_COMMAND


# ========== 布局解析 ==========

def parse_pane(raw) -> PaneNode:
    """解析 pane 表

    含非空 panes 列表的表为内部节点（direction 默认 Right），否则为叶子节点。

    Raises:
        ConfigurationError: 结构不合法
    """
    if raw is None:
        return Leaf()
    if not isinstance(raw, dict):
        raise ConfigurationError("pane configuration must be a table")

    command = raw.get('command')
    if command is not None and not isinstance(command, str):
        raise ConfigurationError("'command' must be a string")

    panes = raw.get('panes')
    if panes is None or panes == []:
        return Leaf(command)
    if not isinstance(panes, list):
        raise ConfigurationError("Invalid pane configuration: 'panes' must be a list")

    direction = Direction.parse(raw.get('direction', Direction.RIGHT.value))
    children = []
    for pane in panes:
        weight = pane.get('size', 1) if isinstance(pane, dict) else 1
        children.append(Child(parse_pane(pane), weight))
    return Internal(direction, tuple(children))


def parse_tabs(raw) -> TabTree:
    """解析 tabs 列表，每个 tab 表本身就是根 pane 表，另带可选 name"""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigurationError("'tabs' must be a list if provided")

    tabs = []
    for tab in raw:
        if tab is None:
            tab = {}
        if not isinstance(tab, dict):
            raise ConfigurationError("each tab must be a table")
        name = tab.get('name')
        if name is not None and not isinstance(name, str):
            raise ConfigurationError("tab 'name' must be a string")
        tabs.append(TabSpec(root=parse_pane(tab), name=name))
    return tuple(tabs)


def validate_entry(raw) -> ConfiguredEntry:
    """校验单个配置条目

    Raises:
        ConfigurationError: 条目不合法
    """
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration entry must be a table")

    path = raw.get('path')
    if not path:
        raise ConfigurationError("'path' is required for each workspace entry")
    if not isinstance(path, str):
        raise ConfigurationError("'path' must be a string")

    entry_type = raw.get('type') or 'directory'
    if entry_type not in ENTRY_TYPES:
        raise ConfigurationError(
            f"Invalid type '{entry_type}'. Must be 'directory' or 'worktreeroot'"
        )

    return ConfiguredEntry(path=path, type=entry_type, tabs=parse_tabs(raw.get('tabs')))


def parse_entries(raw) -> tuple[ConfiguredEntry, ...]:
    """解析条目列表，不合法的条目记录错误后跳过"""
    if not isinstance(raw, list):
        logger.error("[配置] workspaces 必须是列表，忽略全部条目")
        return ()

    entries = []
    for i, item in enumerate(raw, start=1):
        try:
            entries.append(validate_entry(item))
        except ConfigurationError as e:
            logger.error(f"Configuration entry {i}: {e}")
    return tuple(entries)


def _parse_icons(raw) -> Icons:
    icons = Icons()
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("[配置] icons 必须是表，使用默认图标")
        return icons
    known = {f.name for f in fields(Icons)}
    for key, value in raw.items():
        if key in known and isinstance(value, str):
            setattr(icons, key, value)
        else:
            logger.warning(f"[配置] 忽略未知图标设置: {key}")
    return icons


def build_context(data, home: Optional[str] = None) -> WorkspaceContext:
    """由已解析的配置数据构建上下文

    顶层可以是带 workspaces 的表，也可以直接是条目列表；其他形式得到空条目列表。
    """
    home = home or home_dir()

    if data is None:
        return WorkspaceContext(home=home)
    if isinstance(data, list):
        return WorkspaceContext(entries=parse_entries(data), home=home)
    if not isinstance(data, dict):
        logger.error("[配置] 顶层配置必须是表或列表，忽略全部条目")
        return WorkspaceContext(home=home)

    history_command = data.get('history_command') or DEFAULT_HISTORY_COMMAND
    if not isinstance(history_command, str):
        logger.warning("[配置] history_command 必须是字符串，使用默认值")
        history_command = DEFAULT_HISTORY_COMMAND

    return WorkspaceContext(
        entries=parse_entries(data.get('workspaces', [])),
        icons=_parse_icons(data.get('icons')),
        home=home,
        history_command=history_command,
    )


def load_context(config_path: Path = None, home: Optional[str] = None) -> WorkspaceContext:
    """加载配置文件并构建上下文

    Args:
        config_path: 配置文件路径，默认 ~/.config/workspace-switcher/config.yaml
        home: home 目录，None 表示自动检测

    Returns:
        WorkspaceContext 对象
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info(f"[配置] 文件不存在，使用默认值: {path}")
        return build_context(None, home=home)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"[配置] 加载失败，使用默认值: {e}")
        return build_context(None, home=home)

    context = build_context(data, home=home)
    logger.info(f"[配置] 已加载: {path}（{len(context.entries)} 个条目）")
    return context


def save_default_config(config_path: Path = None) -> Path:
    """保存默认配置文件（用于生成示例）

    Args:
        config_path: 配置文件路径

    Returns:
        写入的路径
    """
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    default_yaml = """# workspace-switcher 配置文件

# 图标（可选）
icons:
  directory: "📁"
  worktree: "🌳"
  zoxide: "⚡"
  workspace: "🖥️"

# 目录历史命令，每行输出一个目录
history_command: "zoxide query -l"

# 工作区列表
#   type: directory（默认）或 worktreeroot（列出该仓库的所有 git worktree）
#   tabs: 每个 tab 是一个 pane 表；含 panes 的表按 direction（Right/Bottom）分屏，
#         子 pane 的 size 为权重（默认 1）
workspaces:
  - path: ~/src/project
    tabs:
      - name: edit
        direction: Right
        panes:
          - command: nvim
            size: 2
          - direction: Bottom
            panes:
              - command: git status
              - {}
      - name: shell

  - path: ~/src/repo
    type: worktreeroot
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(default_yaml)

    logger.info(f"[配置] 已生成默认配置: {path}")
    return path
